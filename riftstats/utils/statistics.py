"""Statistical utility functions for safe calculations."""

import math


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: The numerator
        denominator: The denominator
        default: Value to return if denominator is zero

    Returns:
        Result of division or default value
    """
    return numerator / denominator if denominator > 0 else default


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves toward positive infinity, e.g. 0.25 -> 0.3 at one digit.

    The builtin round() uses banker's rounding, which would turn 0.25 into
    0.2; displayed stats always round .5 up.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        Rounded value
    """
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor
