"""Tests for Bayliss coefficient design."""

import logging

import numpy as np
import pytest
from scipy import special

from monopulse.core.errors import InvalidArgumentError, NumericDegeneracyError
from monopulse.tapering import bayliss
from monopulse.tapering.bayliss import (
    DEFAULT_N_TERMS,
    POLY_COEFF_TABLE,
    bessel_derivative_zeros,
    compute_coefficients,
    design_parameters,
    zero_locations,
)

# Named tolerances (PLR2004)
IMAG_TOL = 1e-12
PARAM_TOL = 1e-6

FIRST_J1_DERIV_ZERO = 1.8411837813406593


@pytest.mark.parametrize("n_terms", [1, 2, 3, 4, 5, 10, 17, 30])
def test_coefficient_lengths(n_terms):
    """B has N entries and mu has N+1."""
    coeffs = compute_coefficients(-30.0, n_terms)

    assert coeffs.B.shape == (n_terms,)
    assert coeffs.mu.shape == (n_terms + 1,)
    assert coeffs.n_terms == n_terms


@pytest.mark.parametrize("sidelobe_db", [-15.0, -20.0, -30.0, -40.0])
def test_coefficients_purely_imaginary(sidelobe_db):
    coeffs = compute_coefficients(sidelobe_db)

    assert np.all(np.abs(coeffs.B.real) <= IMAG_TOL)
    assert np.all(np.isfinite(coeffs.B))
    assert np.any(np.abs(coeffs.B.imag) > 0)


def test_default_term_count():
    coeffs = compute_coefficients(-30.0)
    assert coeffs.n_terms == DEFAULT_N_TERMS == 17


def test_roots_positive_and_increasing():
    mu = bessel_derivative_zeros(18)

    assert np.all(mu > 0)
    assert np.all(np.diff(mu) > 0)
    assert mu[0] == pytest.approx(FIRST_J1_DERIV_ZERO / np.pi)
    # Each root is a stationary point of J1
    np.testing.assert_allclose(special.jvp(1, np.pi * mu), 0.0, atol=1e-8)


def test_design_parameters_at_minus_30():
    params = design_parameters(-30.0)

    assert params.A == pytest.approx(1.6412609, abs=PARAM_TOL)
    assert params.xi[0] == pytest.approx(2.0708612, abs=PARAM_TOL)
    assert list(params.xi) == sorted(params.xi)

    x = -30.0
    expected_p0 = sum(c * x**k for k, c in enumerate(POLY_COEFF_TABLE[5]))
    assert params.p0 == pytest.approx(expected_p0)


def test_zero_locations():
    params = design_parameters(-30.0)
    z = zero_locations(params, 17)

    assert z.shape == (18,)
    assert z[0] == 0.0
    np.testing.assert_allclose(z[1:5], params.xi)
    k = np.arange(5, 18)
    np.testing.assert_allclose(z[5:], np.sqrt(params.A**2 + k**2))


def test_zero_locations_truncated_for_few_terms():
    params = design_parameters(-25.0)
    z = zero_locations(params, 2)

    np.testing.assert_allclose(z, [0.0, params.xi[0], params.xi[1]])


def test_first_coefficient_matches_closed_form():
    """With N=1 both products are empty and B_0 = -2j mu_0^2 / J1(pi mu_0)."""
    coeffs = compute_coefficients(-30.0, 1)
    mu0 = coeffs.mu[0]

    expected = -2j * mu0**2 / special.j1(np.pi * mu0)
    assert coeffs.B[0] == pytest.approx(expected)


def test_coefficients_deterministic():
    a = compute_coefficients(-30.0, 17)
    b = compute_coefficients(-30.0, 17)

    np.testing.assert_array_equal(a.B, b.B)
    np.testing.assert_array_equal(a.mu, b.mu)


@pytest.mark.parametrize("n_terms", [0, -3])
def test_invalid_term_count(n_terms):
    with pytest.raises(InvalidArgumentError, match="at least 1"):
        compute_coefficients(-30.0, n_terms)


@pytest.mark.parametrize("n_terms", [2.5, "17", True])
def test_non_integer_term_count(n_terms):
    with pytest.raises(InvalidArgumentError, match="integer"):
        compute_coefficients(-30.0, n_terms)


@pytest.mark.parametrize("sidelobe_db", [0.0, 10.0, float("nan"), float("-inf")])
def test_invalid_sidelobe_level(sidelobe_db):
    with pytest.raises(InvalidArgumentError):
        compute_coefficients(sidelobe_db)


def test_low_sidelobe_level_warns(caplog):
    caplog.set_level(logging.WARNING, logger="monopulse")

    compute_coefficients(-50.0)

    assert any("fit range" in r.getMessage() for r in caplog.records)


def test_typical_sidelobe_level_does_not_warn(caplog):
    caplog.set_level(logging.WARNING, logger="monopulse")

    compute_coefficients(-30.0)

    assert not caplog.records


def test_colliding_roots_raise(monkeypatch):
    monkeypatch.setattr(
        bayliss, "bessel_derivative_zeros", lambda n: np.array([0.5, 0.5, 1.5])[:n]
    )

    with pytest.raises(NumericDegeneracyError, match="denominator"):
        compute_coefficients(-30.0, 2)


def test_malformed_roots_raise(monkeypatch):
    monkeypatch.setattr(bayliss.special, "jnp_zeros", lambda n, nt: np.full(nt, 2.0))

    with pytest.raises(NumericDegeneracyError, match="strictly increasing"):
        bessel_derivative_zeros(5)


def reference_coefficients(sidelobe_db, n_terms):
    """Term-by-term Bayliss series with explicit loops over each product."""
    mu = special.jnp_zeros(1, n_terms + 1) / np.pi

    fits = []
    for row in POLY_COEFF_TABLE:
        value = 0.0
        for c in row[::-1]:
            value = value * sidelobe_db + c
        fits.append(value)
    A, xi1, xi2, xi3, xi4, _ = fits

    Z = [0.0, xi1, xi2, xi3, xi4] + [np.sqrt(A**2 + k**2) for k in range(5, n_terms + 1)]
    sigma = mu[n_terms] / Z[n_terms]

    B = []
    for m in range(n_terms):
        num = 1.0
        for k in range(1, n_terms):
            num *= 1.0 - (mu[m] / (sigma * Z[k])) ** 2
        denom = 1.0
        for j in range(n_terms):
            if j != m:
                denom *= 1.0 - (mu[m] / mu[j]) ** 2
        B.append(-(1j * 2 * mu[m] ** 2 / special.j1(np.pi * mu[m])) * num / denom)
    return np.array(B), sigma


@pytest.mark.parametrize("n_terms", [5, 17])
@pytest.mark.parametrize("sidelobe_db", [-20.0, -30.0])
def test_coefficients_match_reference_series(sidelobe_db, n_terms):
    coeffs = compute_coefficients(sidelobe_db, n_terms)
    expected_B, expected_sigma = reference_coefficients(sidelobe_db, n_terms)

    np.testing.assert_allclose(coeffs.B, expected_B, rtol=1e-9, atol=0)
    assert coeffs.sigma == pytest.approx(expected_sigma, rel=1e-12)


@pytest.mark.parametrize("n_terms", [1, 4, 17])
def test_sigma_maps_last_zero_onto_last_root(n_terms):
    coeffs = compute_coefficients(-30.0, n_terms)
    z = zero_locations(coeffs.parameters, n_terms)

    assert coeffs.sigma * z[n_terms] == pytest.approx(coeffs.mu[n_terms], rel=1e-14)
