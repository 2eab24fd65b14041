"""Monopulse aperture tapering package.

Design Bayliss difference-beam tapering for circular apertures and sample it
at element positions of a circular array.
"""

from .tapering import bayliss_tapering, compute_coefficients, evaluate_tapering

__version__ = "0.1.0"

__all__ = [
    "core",
    "tapering",
    "bayliss_tapering",
    "compute_coefficients",
    "evaluate_tapering",
]
