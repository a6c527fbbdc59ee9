"""Number equality functions usable as Options.compare_numbers."""

from __future__ import annotations

import math
import sys
from decimal import InvalidOperation
from typing import Optional

from .exceptions import ConfigurationError
from .models import Number, NumberComparator


def literal_equal(a: Number, b: Number) -> bool:
    """Byte-for-byte comparison of the literal tokens (the default)."""
    return a.literal == b.literal


def float_epsilon_equal(a: Number, b: Number, epsilon: float = sys.float_info.epsilon) -> bool:
    """
    Compare two numbers as floats with a relative epsilon.

    The epsilon is scaled by the larger magnitude of the two values, so
    the comparison degrades for values very close to zero.

    Args:
        a: The first number
        b: The second number
        epsilon: Relative tolerance before scaling

    Returns:
        True if the values are considered equal
    """
    try:
        a_float = a.to_float()
        b_float = b.to_float()
    except (ValueError, OverflowError):
        return literal_equal(a, b)
    if math.isinf(a_float) or math.isinf(b_float):
        return literal_equal(a, b)

    scaled = epsilon * max(abs(a_float), abs(b_float))
    return math.fabs(a_float - b_float) < scaled or a_float == b_float


def decimal_equal(a: Number, b: Number) -> bool:
    """Exact numeric equality, so 1.0 equals 1.00 and 1e2 equals 100."""
    try:
        return a.to_decimal() == b.to_decimal()
    except (ValueError, InvalidOperation):
        return literal_equal(a, b)


_MODES = {
    "literal": None,
    "float": float_epsilon_equal,
    "decimal": decimal_equal,
}


def number_comparator(mode: str) -> Optional[NumberComparator]:
    """Resolve a number comparison mode name to a comparator."""
    if mode not in _MODES:
        raise ConfigurationError(
            f"Unknown number comparison '{mode}', expected one of: {', '.join(_MODES)}",
            "number_comparison",
        )
    return _MODES[mode]
