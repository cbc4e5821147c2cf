"""
Calculator - four-function calculator page.
The page script sends each button press / key press to /api/press and draws
the display it gets back. State lives in the Flask session.
"""

import logging
import time

from flask import Blueprint, current_app, jsonify, render_template, request, session

from app.projects.calculator.core.constants import (
    DEFAULT_ERROR_RESET_SECONDS,
    SESSION_KEY,
)
from app.projects.calculator.core.display import render
from app.projects.calculator.core.engine import CalculatorEngine
from app.projects.calculator.core.errors import CalculationError, InvalidInputError
from app.projects.calculator.core.keymap import (
    CLEAR,
    KEY_BUTTONS,
    dispatch,
    resolve_button,
    resolve_key,
)
from app.projects.calculator.core.recovery import ErrorRecovery
from app.utils.logging import log_project_event, log_project_visit

logger = logging.getLogger(__name__)

calculator_bp = Blueprint(
    "calculator",
    __name__,
    template_folder="templates",
    url_prefix="/calculator",
)


def _now():
    return time.time()


def _reset_delay():
    return current_app.config.get("CALCULATOR_ERROR_RESET_SECONDS", DEFAULT_ERROR_RESET_SECONDS)


def _load_calculator():
    """Engine and pending recovery for this session, with any due reset applied."""
    data = session.get(SESSION_KEY) or {}
    engine = CalculatorEngine.from_dict(data.get("engine"))
    recovery = ErrorRecovery.from_dict(data.get("recovery"), delay=_reset_delay(), clock=_now)
    recovery.poll(engine)
    return engine, recovery


def _save_calculator(engine, recovery):
    session[SESSION_KEY] = {
        "engine": engine.to_dict(),
        "recovery": recovery.to_dict(),
    }


def _payload(engine, recovery):
    remaining = recovery.remaining()
    return {
        "display": render(engine, error=recovery.message if recovery.pending else None),
        "state": engine.to_dict(),
        "reset_after_ms": int(remaining * 1000) if remaining is not None else None,
    }


def _parse_press(data):
    """
    Accepts {"action", "value"}, {"button"} or {"key"}.
    Returns (action, value), or None for a key that isn't bound to anything.
    """
    if "action" in data:
        if not isinstance(data["action"], str):
            raise InvalidInputError("Action must be a string")
        return data["action"], data.get("value")
    if "button" in data:
        return resolve_button(str(data["button"]))
    if "key" in data:
        return resolve_key(str(data["key"]))
    raise InvalidInputError("Request must include action, button or key")


@calculator_bp.route("/")
def index():
    """Display the calculator."""
    log_project_visit("calculator", "Calculator")
    engine, recovery = _load_calculator()
    _save_calculator(engine, recovery)
    return render_template(
        "calculator.html",
        key_buttons=KEY_BUTTONS,
        **_payload(engine, recovery),
    )


@calculator_bp.route("/api/state")
def api_state():
    """Current display. The page calls this when a pending reset is due."""
    engine, recovery = _load_calculator()
    _save_calculator(engine, recovery)
    return jsonify(_payload(engine, recovery))


@calculator_bp.route("/api/press", methods=["POST"])
def api_press():
    """Apply one button or key press. Returns {display, state, reset_after_ms} or {error}."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body"}), 400

    try:
        press = _parse_press(data)
    except InvalidInputError as e:
        logger.warning(f"Rejected calculator input {data!r}: {e}")
        return jsonify({"error": str(e)}), 400

    engine, recovery = _load_calculator()

    if press is not None:
        action, value = press
        if recovery.pending:
            # Error on screen: only Clear does anything until the reset fires
            if action == CLEAR:
                recovery.cancel()
                engine.clear()
        else:
            try:
                dispatch(engine, action, value)
            except InvalidInputError as e:
                logger.warning(f"Rejected calculator input {data!r}: {e}")
                return jsonify({"error": str(e)}), 400
            except CalculationError as e:
                logger.info(f"Calculator error: {e.message} ({engine!r})")
                recovery.schedule(e.message)
                log_project_event("calculator", "Error", f"{e.message} ({engine!r})")

    _save_calculator(engine, recovery)
    return jsonify(_payload(engine, recovery))


@calculator_bp.route("/api/clear", methods=["POST"])
def api_clear():
    """Reset the calculator, dropping any pending error."""
    engine, recovery = _load_calculator()
    recovery.cancel()
    engine.clear()
    _save_calculator(engine, recovery)
    return jsonify(_payload(engine, recovery))
