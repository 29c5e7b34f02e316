"""Shape tags for scalar, vector and matrix expressions."""

from __future__ import annotations

import enum
import math
import numbers

import numpy as np

INF = math.inf
NEG_INF = -math.inf


class Shape(enum.Enum):
    """Shape of an expression: scalar, column vector or matrix."""

    SCL = 0
    VEC = 1
    MAT = 2

    @property
    def dim(self) -> int:
        """Number of dimensions of the shape."""
        return self.value


def max_shape(a: Shape, b: Shape) -> Shape:
    """Return the larger of two shapes; a matrix always wins."""
    if Shape.MAT in (a, b):
        return Shape.MAT
    return a if a.dim > b.dim else b


def shape_of(value) -> Shape:
    """Return the shape of an expression, a number or an array-like value."""
    shape = getattr(value, "shape", None)
    if isinstance(shape, Shape):
        return shape
    if isinstance(value, (str, bytes)):
        raise TypeError(f"cannot use {type(value).__name__} as a value")
    if isinstance(value, numbers.Number) and not isinstance(value, np.ndarray):
        if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
            raise TypeError("complex values are not supported")
        return Shape.SCL
    if isinstance(value, (np.ndarray, list, tuple)):
        ndim = np.asarray(value).ndim
        try:
            return Shape(ndim)
        except ValueError:
            raise ValueError(f"arrays of {ndim} dimensions are not supported") from None
    raise TypeError(f"cannot use {type(value).__name__} as a value")