"""
Operand text <-> number helpers.

Operands are kept as the text the user typed (so "3." survives until the next
key), and only parsed when arithmetic is needed.
"""
import math
import re
import sys
from decimal import Decimal

from app.projects.calculator.core.constants import RESULT_DECIMALS

_SCALE = 10 ** RESULT_DECIMALS

# Leading numeric prefix: "3." -> 3, "1e+21" -> 1e21, "-" -> no match
_OPERAND_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Plain notation is used between these magnitudes, exponent form outside
_PLAIN_MIN = 1e-6
_PLAIN_MAX = 1e21


def parse_operand(text: str) -> float | None:
    """Parse the numeric prefix of an operand. Returns None if there is none."""
    if not text:
        return None
    match = _OPERAND_RE.match(text)
    if not match:
        return None
    return float(match.group(0))


def round9(value: float) -> float:
    """Round half-up to RESULT_DECIMALS places, e.g. 0.30000000000000004 -> 0.3."""
    scaled = (value + sys.float_info.epsilon) * _SCALE
    if not math.isfinite(scaled):
        # Too large to carry a fractional part anyway
        return value
    return float(math.floor(scaled + 0.5)) / _SCALE


def number_to_text(value: float) -> str:
    """
    Shortest text for a result: 8 -> "8", 0.3 -> "0.3", 1e21 -> "1e+21",
    1e-7 -> "1e-7".
    """
    if value == 0:
        return "0"
    text = repr(value)
    if not math.isfinite(value):
        return text
    magnitude = abs(value)
    if _PLAIN_MIN <= magnitude < _PLAIN_MAX:
        text = format(Decimal(text), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    mantissa, exponent = text.split("e")
    return f"{mantissa}e{int(exponent):+d}"
