"""Number rendering shared by results and trace lines."""

from __future__ import annotations

import math
from decimal import Decimal

DEFAULT_PRECISION = 12

# Integers at or above this magnitude are no longer exact in a double.
_EXACT_INT_LIMIT = 1e15

# Rounded values in this magnitude range print as plain decimals.
_POSITIONAL_MIN = 1e-6
_POSITIONAL_MAX = 1e21


def _positional(value: float) -> str:
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Render a float for display.

    Integer values below 1e15 in magnitude print without a decimal point.
    Everything else is rounded to ``precision`` significant digits and,
    between 1e-6 and 1e21 in magnitude, written out positionally with
    trailing zeros trimmed.

    >>> format_number(512.0)
    '512'
    >>> format_number(0.1 + 0.2)
    '0.3'
    >>> format_number(math.pi)
    '3.14159265359'
    >>> format_number(1e-5)
    '0.00001'
    >>> format_number(2.5e15)
    '2500000000000000'
    """
    value = float(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < _EXACT_INT_LIMIT:
        return str(int(value))

    rounded = float(f"{value:.{precision}g}")
    if rounded == 0:
        return "0"
    if _POSITIONAL_MIN <= abs(rounded) < _POSITIONAL_MAX:
        return _positional(rounded)
    return f"{rounded:.{precision}g}"
