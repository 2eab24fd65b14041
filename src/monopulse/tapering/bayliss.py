"""Bayliss tapering for difference beams of circular apertures.

The Bayliss tapering is a set of purely imaginary amplitude weights over a
continuous circular aperture that forms a difference beam (odd symmetry about
an axis) while holding the four closest sidelobes to a desired level. Sampling
it at element positions gives the tapering of a circular phased array.

The design uses the polynomial fits tabulated below Figure 4 of

    E. T. Bayliss, "Design of monopulse antenna difference patterns with low
    sidelobes," The Bell System Technical Journal, vol. 47, no. 5,
    pp. 623-650, May-Jun. 1968.

Patterns at -45 dB and below do not hold their sidelobes faithfully because
of that approximation.

Given coefficients B and roots mu, the weight at a point (x, y) in an aperture
of radius a is

    g = (x / rho) * sum(B[k] * J1(mu[k] * pi * rho / a), k < N)

with rho = hypot(x, y). Points outside the aperture and the centre get 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.polynomial import polynomial as P
from scipy import special

from ..core.errors import InvalidArgumentError, NumericDegeneracyError
from ..core.logging import get_logger
from ..core.sampling import as_point_array
from ..core.types import ComplexArray, DifferenceAxis, FloatArray, PointLike

logger = get_logger(__name__)

DEFAULT_N_TERMS = 17

# Below this level the polynomial fits lose sidelobe fidelity
FIDELITY_LIMIT_DB = -45.0

# Smallest magnitude tolerated for a product factor or Bessel value we divide by
DEGENERACY_EPS = 1e-12

# Rows: A, xi_1..xi_4, p0. Columns: ascending powers of the sidelobe level in dB.
POLY_COEFF_TABLE = np.array(
    [
        [0.30387530, -0.05042922, -0.00027989, -0.00000343, -0.00000002],
        [0.98583020, -0.03338850, 0.00014064, 0.00000190, 0.00000001],
        [2.00337487, -0.01141548, 0.00041590, 0.00000373, 0.00000001],
        [3.00636321, -0.00683394, 0.00029281, 0.00000161, 0.0],
        [4.00518423, -0.00501795, 0.00021735, 0.00000088, 0.0],
        [0.47972120, -0.01456692, -0.00018739, -0.00000218, -0.00000001],
    ]
)

NUM_MOVED_ZEROS = 4


@dataclass(frozen=True)
class BaylissParameters:
    """Sidelobe-dependent design parameters.

    Attributes:
        A: Shift applied to the unmoved zeros
        xi: Locations of the four moved pattern zeros
        p0: Where the asymptotic difference pattern peaks (informational)
    """

    A: float
    xi: tuple[float, float, float, float]
    p0: float


@dataclass(frozen=True, eq=False)
class BaylissCoefficients:
    """Series coefficients of a Bayliss tapering.

    Attributes:
        B: Complex coefficients B_0..B_{N-1}, all purely imaginary
        mu: Zeros of J1' divided by pi, mu_0..mu_N
        sidelobe_db: Sidelobe level the coefficients were designed for
        parameters: Design parameters from the polynomial fits
        sigma: Scale mapping the pattern zeros onto the roots, mu_N / Z_N
    """

    B: ComplexArray
    mu: FloatArray
    sidelobe_db: float
    parameters: BaylissParameters
    sigma: float

    @property
    def n_terms(self) -> int:
        return int(self.B.shape[0])

    def evaluate(
        self,
        points: PointLike | None,
        aperture_radius: float | None = None,
        difference_axis: DifferenceAxis | str = DifferenceAxis.Y,
    ) -> ComplexArray:
        """Evaluate the tapering at ``points``; see :func:`evaluate_tapering`."""
        return evaluate_tapering(self.B, self.mu, points, aperture_radius, difference_axis)


def _validate_n_terms(n_terms: int) -> int:
    if isinstance(n_terms, bool) or not isinstance(n_terms, (int, np.integer)):
        raise InvalidArgumentError(f"Number of terms must be an integer, got {n_terms!r}")
    if n_terms < 1:
        raise InvalidArgumentError(f"Number of terms must be at least 1, got {n_terms}")
    return int(n_terms)


def _validate_sidelobe_db(sidelobe_db: float) -> float:
    try:
        value = float(sidelobe_db)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Sidelobe level must be a number, got {sidelobe_db!r}") from e
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Sidelobe level must be finite, got {value}")
    if value >= 0:
        raise InvalidArgumentError(f"Sidelobe level must be negative (dB), got {value}")
    return value


def bessel_derivative_zeros(n_zeros: int) -> FloatArray:
    """First ``n_zeros`` zeros of the derivative of J1, divided by pi.

    Raises:
        InvalidArgumentError: If fewer than one zero is requested
        NumericDegeneracyError: If the roots are not positive and strictly increasing
    """
    n_zeros = _validate_n_terms(n_zeros)
    mu = np.asarray(special.jnp_zeros(1, n_zeros), dtype=np.float64) / np.pi

    if mu.shape != (n_zeros,) or np.any(mu <= 0) or np.any(np.diff(mu) <= 0):
        raise NumericDegeneracyError(
            f"Bessel derivative zeros are not positive and strictly increasing: {mu}"
        )
    return mu


def design_parameters(sidelobe_db: float) -> BaylissParameters:
    """Evaluate the polynomial fits at a sidelobe level in dB."""
    sidelobe_db = _validate_sidelobe_db(sidelobe_db)
    values = [float(P.polyval(sidelobe_db, row)) for row in POLY_COEFF_TABLE]
    A, xi1, xi2, xi3, xi4, p0 = values
    return BaylissParameters(A=A, xi=(xi1, xi2, xi3, xi4), p0=p0)


def zero_locations(params: BaylissParameters, n_terms: int) -> FloatArray:
    """Pattern zero locations Z_0..Z_N.

    Z_0 is 0, Z_1..Z_4 are the moved zeros and the rest follow
    sqrt(A^2 + k^2). For fewer than four terms the moved zeros are truncated.
    """
    n_terms = _validate_n_terms(n_terms)
    k = np.arange(n_terms + 1, dtype=np.float64)
    z = np.sqrt(params.A**2 + k**2)
    z[0] = 0.0

    n_moved = min(NUM_MOVED_ZEROS, n_terms)
    z[1 : n_moved + 1] = params.xi[:n_moved]
    return z


def compute_coefficients(
    sidelobe_db: float, n_terms: int = DEFAULT_N_TERMS
) -> BaylissCoefficients:
    """Compute the Bayliss series coefficients for a sidelobe level.

    No normalisation is applied to the coefficients.

    Args:
        sidelobe_db: Ratio of near-in sidelobe voltage to main lobe voltage
            in dB; must be negative, typically about -30
        n_terms: Number of series terms N. Too many terms raise the edge
            illumination; N < 2a/lambda is a reasonable bound.

    Returns:
        BaylissCoefficients with N coefficients and N+1 roots

    Raises:
        InvalidArgumentError: If N < 1 or the sidelobe level is not negative
        NumericDegeneracyError: If a divisor in the series vanishes
    """
    sidelobe_db = _validate_sidelobe_db(sidelobe_db)
    n_terms = _validate_n_terms(n_terms)

    if sidelobe_db <= FIDELITY_LIMIT_DB:
        logger.warning(
            "Sidelobe level below polynomial fit range, sidelobes will not be held exactly",
            {"sidelobe_db": sidelobe_db, "limit_db": FIDELITY_LIMIT_DB},
        )

    mu = bessel_derivative_zeros(n_terms + 1)
    params = design_parameters(sidelobe_db)
    z = zero_locations(params, n_terms)

    sigma = mu[n_terms] / z[n_terms]
    scaled_zeros = sigma * z[1:n_terms]
    if not math.isfinite(sigma) or np.any(np.abs(scaled_zeros) < DEGENERACY_EPS):
        raise NumericDegeneracyError(
            f"Degenerate zero locations for sidelobe level {sidelobe_db} dB"
        )

    B = np.zeros(n_terms, dtype=np.complex128)
    for m in range(n_terms):
        mu_m = mu[m]
        numerator = np.prod(1.0 - (mu_m / scaled_zeros) ** 2)

        # j == m is a removable singularity and is left out of the product
        others = np.delete(mu[:n_terms], m)
        factors = 1.0 - (mu_m / others) ** 2
        if factors.size and np.min(np.abs(factors)) < DEGENERACY_EPS:
            raise NumericDegeneracyError(
                f"Near-zero denominator factor for term {m} (N={n_terms})"
            )
        denominator = np.prod(factors)

        bessel = special.j1(np.pi * mu_m)
        if abs(bessel) < DEGENERACY_EPS:
            raise NumericDegeneracyError(f"J1(pi*mu_{m}) vanishes (N={n_terms})")

        B[m] = -(2j * mu_m**2 / bessel) * numerator / denominator

    if not np.all(np.isfinite(B)):
        raise NumericDegeneracyError(f"Non-finite coefficients for N={n_terms}")

    logger.debug(
        "Computed Bayliss coefficients",
        {
            "sidelobe_db": sidelobe_db,
            "n_terms": n_terms,
            "A": params.A,
            "xi": list(params.xi),
            "sigma": float(sigma),
        },
    )

    return BaylissCoefficients(
        B=B, mu=mu, sidelobe_db=sidelobe_db, parameters=params, sigma=float(sigma)
    )


def evaluate_tapering(
    B: ComplexArray,
    mu: FloatArray,
    points: PointLike | None,
    aperture_radius: float | None = None,
    difference_axis: DifferenceAxis | str = DifferenceAxis.Y,
) -> ComplexArray:
    """Evaluate a Bayliss tapering at points of the aperture plane.

    Args:
        B: Coefficients from :func:`compute_coefficients`
        mu: Roots from :func:`compute_coefficients` (one more than ``B``)
        points: (x, y) pairs with the aperture centred on the origin
        aperture_radius: Aperture radius; the farthest point's distance if omitted
        difference_axis: Axis of odd symmetry, "y" (default) or "x"

    Returns:
        Complex weights in point order, empty when there are no points

    Raises:
        InvalidArgumentError: On malformed coefficients, points or radius
    """
    B = np.asarray(B, dtype=np.complex128).ravel()
    mu = np.asarray(mu, dtype=np.float64).ravel()
    if B.size < 1:
        raise InvalidArgumentError("At least one coefficient is required")
    if mu.size != B.size + 1:
        raise InvalidArgumentError(
            f"Expected {B.size + 1} roots for {B.size} coefficients, got {mu.size}"
        )
    try:
        axis = DifferenceAxis(difference_axis)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown difference axis {difference_axis!r}") from e

    pts = as_point_array(points)
    g = np.zeros(pts.shape[0], dtype=np.complex128)
    if pts.shape[0] == 0:
        return g

    rho2 = np.sum(pts**2, axis=1)
    if aperture_radius is None:
        # The farthest point lies exactly on the inferred boundary
        radius2 = float(np.max(rho2))
        radius = math.sqrt(radius2)
    else:
        radius = float(aperture_radius)
        if not (math.isfinite(radius) and radius > 0):
            raise InvalidArgumentError(f"Aperture radius must be positive, got {aperture_radius}")
        radius2 = radius**2

    # The centre is a removable singularity of x/rho; its weight is 0
    inside = (rho2 <= radius2) & (rho2 > 0)
    if not np.any(inside):
        return g

    rho = np.sqrt(rho2[inside])
    p = np.pi * rho / radius
    # Symmetric about the y axis means the cosine is taken along x, and vice versa
    along = pts[inside, 0] if axis is DifferenceAxis.Y else pts[inside, 1]
    cos_val = along / rho

    g[inside] = cos_val * (special.j1(np.outer(p, mu[: B.size])) @ B)
    return g


def bayliss_tapering(
    sidelobe_db: float,
    n_terms: int = DEFAULT_N_TERMS,
    points: PointLike | None = None,
    aperture_radius: float | None = None,
    difference_axis: DifferenceAxis | str = DifferenceAxis.Y,
) -> tuple[ComplexArray, ComplexArray, FloatArray]:
    """Design a Bayliss tapering and optionally sample it.

    Returns:
        Tuple (g, B, mu); g is empty if no points are given
    """
    coeffs = compute_coefficients(sidelobe_db, n_terms)
    g = coeffs.evaluate(points, aperture_radius, difference_axis)
    return g, coeffs.B, coeffs.mu


__all__ = [
    "DEFAULT_N_TERMS",
    "FIDELITY_LIMIT_DB",
    "DEGENERACY_EPS",
    "POLY_COEFF_TABLE",
    "BaylissParameters",
    "BaylissCoefficients",
    "bessel_derivative_zeros",
    "design_parameters",
    "zero_locations",
    "compute_coefficients",
    "evaluate_tapering",
    "bayliss_tapering",
]
