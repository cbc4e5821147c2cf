"""
Turn engine state into the two display lines.

current line:  the operand being typed, digit-grouped ("1,234.5")
previous line: "<prev> <op>" plus a live "<current> = <preview>" while typing
"""
import math

from app.projects.calculator.core.constants import (
    ERROR_DISPLAY,
    INITIAL_OPERAND,
    MAX_DISPLAY_LENGTH,
    SCIENTIFIC_DIGITS,
)
from app.projects.calculator.core.engine import DIVIDE_BY_ZERO
from app.projects.calculator.core.numbers import number_to_text, parse_operand


def _scientific(value: float) -> str:
    if not math.isfinite(value):
        return number_to_text(value)
    mantissa, exponent = f"{value:.{SCIENTIFIC_DIGITS}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def _group_integer(text: str) -> str:
    value = parse_operand(text)
    if value is None:
        return ""
    if value == 0 and text.lstrip().startswith("-"):
        return "-0"
    return f"{int(value):,}"


def format_number(text: str) -> str:
    """Format operand text for display. Keeps a trailing "." while typing."""
    # Exponent text ("1e+308") would group into hundreds of digits
    if len(text) > MAX_DISPLAY_LENGTH or "e" in text.lower():
        value = parse_operand(text)
        if value is not None:
            return _scientific(value)

    integer_part, dot, decimal_part = text.partition(".")
    integer_display = _group_integer(integer_part)
    if dot:
        return f"{integer_display}.{decimal_part}"
    return integer_display


def preview_line(engine) -> str:
    """Second display line; empty unless an operator is pending."""
    if not engine.operation or engine.previous_operand == "":
        return ""

    text = f"{format_number(engine.previous_operand)} {engine.operation.symbol}"
    if engine.current_operand == "" or engine.should_reset_display:
        return text

    text += f" {format_number(engine.current_operand)}"
    preview = engine.preview_result()
    # A zero divisor still shows what was typed, just no "= ..."
    if preview is None or preview is DIVIDE_BY_ZERO or not math.isfinite(preview):
        return text
    return f"{text} = {format_number(number_to_text(preview))}"


def render(engine, error=None) -> dict:
    """
    Everything the page needs to draw the calculator.
    `error` is the message of a pending auto-clear, if any.
    """
    if error:
        return {
            "current": ERROR_DISPLAY,
            "previous": error,
            "operation": None,
            "error": error,
        }

    current = engine.current_operand or INITIAL_OPERAND
    return {
        "current": format_number(current),
        "previous": preview_line(engine),
        "operation": engine.operation.value if engine.operation else None,
        "error": None,
    }
