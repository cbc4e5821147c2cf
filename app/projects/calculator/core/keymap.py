"""
Input routing: every button and key maps to one of six actions, and every
action maps to one engine method.
"""
from app.projects.calculator.core.engine import Operator
from app.projects.calculator.core.errors import InvalidInputError

DIGIT = "digit"
OPERATOR = "operator"
EQUALS = "equals"
CLEAR = "clear"
BACKSPACE = "backspace"
PERCENT = "percent"


def _digit(engine, value):
    if value is None:
        raise InvalidInputError("Digit action needs a value")
    engine.input_digit(str(value))


def _operator(engine, value):
    if value is None:
        raise InvalidInputError("Operator action needs a value")
    op = value if isinstance(value, Operator) else Operator.from_token(value)
    engine.choose_operator(op)


# action -> handler(engine, value)
ACTIONS = {
    DIGIT: _digit,
    OPERATOR: _operator,
    EQUALS: lambda engine, value: engine.calculate(),
    CLEAR: lambda engine, value: engine.clear(),
    BACKSPACE: lambda engine, value: engine.backspace(),
    PERCENT: lambda engine, value: engine.percent(),
}

# data-action / data-number tokens used by the page buttons
BUTTON_ACTIONS = {
    **{d: (DIGIT, d) for d in "0123456789."},
    **{op.value: (OPERATOR, op.value) for op in Operator},
    "calculate": (EQUALS, None),
    "clear": (CLEAR, None),
    "delete": (BACKSPACE, None),
    "percent": (PERCENT, None),
}

# KeyboardEvent.key -> (action, value)
KEY_BINDINGS = {
    **{d: (DIGIT, d) for d in "0123456789."},
    **{op.key: (OPERATOR, op.value) for op in Operator},
    "Enter": (EQUALS, None),
    "=": (EQUALS, None),
    "Escape": (CLEAR, None),
    "Backspace": (BACKSPACE, None),
    "%": (PERCENT, None),
}

_BUTTON_FOR_PRESS = {press: token for token, press in BUTTON_ACTIONS.items()}

# KeyboardEvent.key -> button token, so the page can animate the matching button
KEY_BUTTONS = {key: _BUTTON_FOR_PRESS[press] for key, press in KEY_BINDINGS.items()}


def resolve_key(key):
    """(action, value) for a keyboard key, or None if the key is not bound."""
    return KEY_BINDINGS.get(key)


def resolve_button(token):
    """(action, value) for a button token. Raises InvalidInputError if unknown."""
    try:
        return BUTTON_ACTIONS[token]
    except KeyError:
        raise InvalidInputError(f"Unknown button: {token!r}")


def dispatch(engine, action, value=None):
    """Run one action against the engine. Calculation errors propagate."""
    handler = ACTIONS.get(action) if isinstance(action, str) else None
    if handler is None:
        raise InvalidInputError(f"Unknown action: {action!r}")
    handler(engine, value)
