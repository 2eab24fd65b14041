"""Tests for unit conversion and aperture sampling helpers."""

import numpy as np
import pytest

from monopulse.core.errors import InvalidArgumentError
from monopulse.core.sampling import (
    as_point_array,
    check_term_count,
    max_recommended_terms,
)
from monopulse.core.units import db_to_ratio, ratio_to_db


def test_db_ratio_conversion():
    assert db_to_ratio(-20.0) == pytest.approx(0.1)
    assert ratio_to_db(0.001) == pytest.approx(-60.0)
    assert ratio_to_db(db_to_ratio(-30.0)) == pytest.approx(-30.0)


@pytest.mark.parametrize("ratio", [0.0, -1.0])
def test_ratio_must_be_positive(ratio):
    with pytest.raises(InvalidArgumentError):
        ratio_to_db(ratio)


def test_as_point_array_shapes():
    assert as_point_array(None).shape == (0, 2)
    assert as_point_array((0.5, 0.25)).shape == (1, 2)
    assert as_point_array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]).shape == (3, 2)

    square = as_point_array([[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_array_equal(square, [[1.0, 2.0], [3.0, 4.0]])


@pytest.mark.parametrize("points", [[1.0, 2.0, 3.0], [[[1.0, 2.0]]], [[np.inf, 0.0]]])
def test_as_point_array_rejects(points):
    with pytest.raises(InvalidArgumentError):
        as_point_array(points)


@pytest.mark.parametrize(
    ("radius", "wavelength", "expected"),
    [
        (10.0, 1.0, 19),
        (10.25, 1.0, 20),
        (0.1, 1.0, 1),
    ],
)
def test_max_recommended_terms(radius, wavelength, expected):
    assert max_recommended_terms(radius, wavelength) == expected


def test_max_recommended_terms_invalid():
    with pytest.raises(InvalidArgumentError):
        max_recommended_terms(0.0, 1.0)
    with pytest.raises(InvalidArgumentError):
        max_recommended_terms(1.0, -1.0)


def test_check_term_count():
    assert check_term_count(17, 10.0, 1.0)

    with pytest.warns(UserWarning, match="exceeds recommended maximum"):
        assert not check_term_count(17, 2.0, 1.0)
