"""
Constants for the Calculator: precision, display limits, messages.
Shared by the engine, the display formatter and the adapters.
"""

INITIAL_OPERAND = "0"

# Results are rounded to this many decimal places to hide binary float noise
RESULT_DECIMALS = 9

# Longer operand text is shown in scientific notation
MAX_DISPLAY_LENGTH = 15
SCIENTIFIC_DIGITS = 6

# Seconds an error stays on screen before the calculator clears itself
DEFAULT_ERROR_RESET_SECONDS = 2

DIVIDE_BY_ZERO_MESSAGE = "Cannot divide by zero!"
OVERFLOW_MESSAGE = "Result too large!"
ERROR_DISPLAY = "Error"

DIGIT_TOKENS = frozenset("0123456789.")

SESSION_KEY = "calculator"
