"""Aperture sampling helpers and term-count heuristics.

Points are (x, y) pairs in the aperture plane with the aperture centred on
the origin. Radius and wavelength share whatever length unit the caller uses.
"""

import math
import warnings

import numpy as np

from .errors import InvalidArgumentError
from .types import FloatArray, PointLike


def as_point_array(points: PointLike | None) -> FloatArray:
    """Normalise evaluation points to an (n, 2) float array.

    Accepts a sequence of (x, y) pairs or a 2 x n array (the column layout);
    a 2 x 2 input is read as two (x, y) rows.

    Raises:
        InvalidArgumentError: If the points are not two-dimensional or not finite
    """
    if points is None:
        return np.empty((0, 2), dtype=np.float64)

    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    if arr.ndim == 1 and arr.shape[0] == 2:
        arr = arr.reshape(1, 2)
    elif arr.ndim == 2 and arr.shape[1] != 2 and arr.shape[0] == 2:
        arr = arr.T

    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidArgumentError(f"Points must be (x, y) pairs, got shape {np.shape(points)}")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError("Points must be finite")

    return arr


def max_recommended_terms(aperture_radius: float, wavelength: float) -> int:
    """Largest term count N satisfying N < 2a/lambda.

    More terms raise the edge illumination of the tapering, so the series is
    kept below the number of aperture half-wavelengths.

    Args:
        aperture_radius: Aperture radius
        wavelength: Wavelength in the same unit as the radius

    Returns:
        Recommended maximum N (at least 1)
    """
    if not aperture_radius > 0:
        raise InvalidArgumentError(f"Aperture radius must be positive, got {aperture_radius}")
    if not wavelength > 0:
        raise InvalidArgumentError(f"Wavelength must be positive, got {wavelength}")

    limit = 2.0 * aperture_radius / wavelength
    n_max = math.ceil(limit) - 1
    return max(1, n_max)


def check_term_count(n_terms: int, aperture_radius: float, wavelength: float) -> bool:
    """Check a term count against the aperture size in wavelengths.

    Returns:
        True if within the recommended range, False otherwise
    """
    n_max = max_recommended_terms(aperture_radius, wavelength)
    if n_terms > n_max:
        warnings.warn(
            f"Term count {n_terms} exceeds recommended maximum {n_max} for an aperture "
            f"of radius {aperture_radius:g} at wavelength {wavelength:g}. "
            "Edge illumination will increase.",
            category=UserWarning,
            stacklevel=2,
        )
        return False
    return True


__all__ = [
    "as_point_array",
    "max_recommended_terms",
    "check_term_count",
]
