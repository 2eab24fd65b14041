"""Aperture tapering for monopulse difference beams."""

from .bayliss import (
    DEFAULT_N_TERMS,
    BaylissCoefficients,
    BaylissParameters,
    bayliss_tapering,
    compute_coefficients,
    evaluate_tapering,
)

__all__ = [
    "DEFAULT_N_TERMS",
    "BaylissCoefficients",
    "BaylissParameters",
    "bayliss_tapering",
    "compute_coefficients",
    "evaluate_tapering",
]
