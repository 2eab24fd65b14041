"""Custom exception types for monopulse tapering."""


class MonopulseError(Exception):
    """Base exception for all monopulse errors."""

    pass


class InvalidArgumentError(MonopulseError):
    """Argument outside the domain the tapering is defined on."""

    pass


class NumericDegeneracyError(MonopulseError):
    """Near-zero denominators or malformed special-function roots."""

    pass


class ConfigError(MonopulseError):
    """Configuration-related errors."""

    pass


__all__ = [
    "MonopulseError",
    "InvalidArgumentError",
    "NumericDegeneracyError",
    "ConfigError",
]
