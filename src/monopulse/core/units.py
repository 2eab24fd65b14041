"""Unit conversion utilities for sidelobe levels.

Sidelobe levels are ratios of voltages, so decibels use 20*log10.
"""

import math

from .errors import InvalidArgumentError


def db_to_ratio(value: float | int) -> float:
    """Convert decibels to a linear voltage ratio."""
    return 10.0 ** (float(value) / 20.0)


def ratio_to_db(value: float | int) -> float:
    """Convert a linear voltage ratio to decibels.

    Raises:
        InvalidArgumentError: If the ratio is not positive
    """
    if not value > 0:
        raise InvalidArgumentError(f"Voltage ratio must be positive, got {value}")
    return 20.0 * math.log10(float(value))


__all__ = [
    "db_to_ratio",
    "ratio_to_db",
]
