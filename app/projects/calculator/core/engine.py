"""
Calculator state machine: operand entry, operator chaining, results.

The engine owns the whole calculator state. Adapters (web routes, CLI) call
its operations and read the four state fields to render the display.
"""
import enum
import logging
import math

from app.projects.calculator.core.constants import DIGIT_TOKENS, INITIAL_OPERAND
from app.projects.calculator.core.errors import (
    DivideByZeroError,
    InvalidInputError,
    ResultOverflowError,
)
from app.projects.calculator.core.numbers import number_to_text, parse_operand, round9

logger = logging.getLogger(__name__)


class Operator(enum.Enum):
    Add = "add"
    Subtract = "subtract"
    Multiply = "multiply"
    Divide = "divide"

    @property
    def symbol(self):
        return _SYMBOLS[self]

    @property
    def key(self):
        return _KEYS[self]

    def apply(self, left, right):
        """Plain float arithmetic. Division by zero is checked by the caller."""
        if self is Operator.Add:
            return left + right
        if self is Operator.Subtract:
            return left - right
        if self is Operator.Multiply:
            return left * right
        return left / right

    @classmethod
    def from_token(cls, token):
        """Look up by action token ("add") or keyboard key ("+")."""
        for op in cls:
            if token in (op.value, op.key):
                return op
        raise InvalidInputError(f"Unknown operator: {token!r}")


_SYMBOLS = {
    Operator.Add: "+",
    Operator.Subtract: "-",
    Operator.Multiply: "×",
    Operator.Divide: "÷",
}

_KEYS = {
    Operator.Add: "+",
    Operator.Subtract: "-",
    Operator.Multiply: "*",
    Operator.Divide: "/",
}


class _DivideByZero:
    """Marker returned by preview_result() when the divisor is zero."""

    def __repr__(self):
        return "DIVIDE_BY_ZERO"


DIVIDE_BY_ZERO = _DivideByZero()


class CalculatorEngine:
    """
    Two-operand calculator.

    State:
        current_operand: text being typed; "" means awaiting the first digit
        previous_operand: left operand once an operator is chosen, else ""
        operation: pending Operator or None
        should_reset_display: next digit starts a fresh operand
    """

    def __init__(self):
        self.clear()

    def clear(self):
        self.current_operand = INITIAL_OPERAND
        self.previous_operand = ""
        self.operation = None
        self.should_reset_display = False

    def input_digit(self, token):
        if token not in DIGIT_TOKENS or len(token) != 1:
            raise InvalidInputError(f"Not a digit: {token!r}")

        if token == "." and "." in self.current_operand:
            return

        if self.should_reset_display:
            self.current_operand = ""
            self.should_reset_display = False

        if self.current_operand == INITIAL_OPERAND and token != ".":
            self.current_operand = token
        else:
            self.current_operand += token

    def choose_operator(self, op):
        if self.current_operand == "":
            return

        # Chaining: "3 + 4 *" finishes 3 + 4 before starting the multiply
        if self.previous_operand != "" and not self.should_reset_display:
            self.calculate()

        self.operation = op
        self.previous_operand = self.current_operand
        self.current_operand = ""
        self.should_reset_display = False

    def calculate(self):
        """
        Commit the pending operation.

        Raises DivideByZeroError, or ResultOverflowError for an infinite or NaN
        result, without touching the state. Does nothing if an operand is missing or no operator is set.
        """
        operands = self._operands()
        if operands is None:
            return
        prev, current = operands

        if self.operation is Operator.Divide and current == 0:
            raise DivideByZeroError()

        result = self.operation.apply(prev, current)
        if not math.isfinite(result):
            raise ResultOverflowError()

        self.current_operand = number_to_text(round9(result))
        self.operation = None
        self.previous_operand = ""
        self.should_reset_display = True

    def backspace(self):
        if self.should_reset_display:
            self.clear()
            return

        if len(self.current_operand) <= 1:
            self.current_operand = INITIAL_OPERAND
        else:
            self.current_operand = self.current_operand[:-1]

    def percent(self):
        current = parse_operand(self.current_operand)
        if current is None or not math.isfinite(current):
            return
        self.current_operand = number_to_text(current / 100)
        self.should_reset_display = True

    def preview_result(self):
        """
        What calculate() would produce right now, without changing anything.
        Returns a float, DIVIDE_BY_ZERO, or None when there is nothing to compute.
        """
        operands = self._operands()
        if operands is None:
            return None
        prev, current = operands

        if self.operation is Operator.Divide and current == 0:
            return DIVIDE_BY_ZERO
        return round9(self.operation.apply(prev, current))

    def _operands(self):
        if self.operation is None:
            return None
        prev = parse_operand(self.previous_operand)
        current = parse_operand(self.current_operand)
        if prev is None or current is None:
            return None
        return prev, current

    def to_dict(self):
        return {
            "current_operand": self.current_operand,
            "previous_operand": self.previous_operand,
            "operation": self.operation.value if self.operation else None,
            "should_reset_display": self.should_reset_display,
        }

    @classmethod
    def from_dict(cls, data):
        """Rebuild an engine from to_dict() output. Bad payloads give a fresh engine."""
        engine = cls()
        if not isinstance(data, dict):
            return engine
        try:
            current = data.get("current_operand", INITIAL_OPERAND)
            previous = data.get("previous_operand", "")
            if not isinstance(current, str) or not isinstance(previous, str):
                raise InvalidInputError("Operands must be strings")
            op_token = data.get("operation")
            engine.operation = Operator(op_token) if op_token else None
        except (InvalidInputError, ValueError) as e:
            logger.warning(f"Discarding invalid calculator state: {e}")
            return cls()
        engine.current_operand = current
        engine.previous_operand = previous
        engine.should_reset_display = bool(data.get("should_reset_display", False))
        return engine

    def __repr__(self):
        return (
            f"<CalculatorEngine {self.previous_operand!r} "
            f"{self.operation.symbol if self.operation else ''} {self.current_operand!r}>"
        )
