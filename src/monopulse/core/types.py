"""Type definitions and aliases for tapering computations."""

from enum import Enum

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]
ComplexArray = npt.NDArray[np.complex128]

# (x, y) pairs: nested sequences, an (n, 2) array or a 2 x n array
PointLike = npt.ArrayLike


class DifferenceAxis(str, Enum):
    """Axis the difference pattern is odd-symmetric about."""

    X = "x"
    Y = "y"


__all__ = [
    "FloatArray",
    "ComplexArray",
    "PointLike",
    "DifferenceAxis",
]
