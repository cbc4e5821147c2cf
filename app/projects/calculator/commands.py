import click
import logging

from app.projects.calculator.core.display import render
from app.projects.calculator.core.engine import CalculatorEngine
from app.projects.calculator.core.errors import CalculationError, InvalidInputError
from app.projects.calculator.core.keymap import (
    KEY_BINDINGS,
    dispatch,
    resolve_button,
    resolve_key,
)

logger = logging.getLogger(__name__)


def _resolve_token(token):
    press = resolve_key(token)
    if press is None:
        press = resolve_button(token)
    return press


@click.group(name='calculator')
def calculator_cli():
    """Calculator project commands."""
    pass


@calculator_cli.command('press')
@click.argument('tokens', nargs=-1, required=True)
def press_command(tokens):
    """Feed key presses to a fresh calculator, e.g. `press 3 + 4 '*' 2 Enter`."""
    engine = CalculatorEngine()
    for token in tokens:
        try:
            dispatch(engine, *_resolve_token(token))
        except InvalidInputError as e:
            raise click.BadParameter(str(e), param_hint=repr(token))
        except CalculationError as e:
            logger.info(f"Calculator error on {token!r}: {e.message}")
            raise click.ClickException(e.message)

    display = render(engine)
    if display['previous']:
        click.echo(display['previous'])
    click.echo(display['current'])


@calculator_cli.command('keys')
def keys_command():
    """List keyboard bindings."""
    for key, (action, value) in KEY_BINDINGS.items():
        click.echo(f"{key:<10} {action}" + (f" {value}" if value and value != key else ""))


def init_app(app):
    """Register CLI commands with the app."""
    app.cli.add_command(calculator_cli)
