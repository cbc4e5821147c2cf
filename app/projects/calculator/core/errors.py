"""Exceptions raised by the calculator core and caught by the adapters."""

from app.projects.calculator.core.constants import (
    DIVIDE_BY_ZERO_MESSAGE,
    OVERFLOW_MESSAGE,
)


class CalculatorError(Exception):
    """Base class for calculator errors."""


class CalculationError(CalculatorError):
    """
    Recoverable error detected before a result is committed.
    The adapter shows `message` and the calculator clears itself after a delay.
    """
    message = "Error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class DivideByZeroError(CalculationError):
    message = DIVIDE_BY_ZERO_MESSAGE


class ResultOverflowError(CalculationError):
    message = OVERFLOW_MESSAGE


class InvalidInputError(CalculatorError):
    """An adapter passed an action or token the calculator does not know."""
