"""Core module with types, units, errors, logging, config, and sampling."""

__all__ = [
    "types",
    "units",
    "errors",
    "logging",
    "config",
    "sampling",
]
