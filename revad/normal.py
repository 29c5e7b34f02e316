"""Normal log-density without the constant -n/2 * log(2*pi) term."""

from __future__ import annotations

import math

import numpy as np

from .expr import Expr, to_expr
from .shapes import NEG_INF, Shape


def _scalar(value) -> float:
    return float(np.asarray(value, dtype=float).reshape(()))


def _check_shapes(x: Expr, mean: Expr, sigma: Expr) -> None:
    if x.shape is Shape.MAT:
        raise ValueError("x must be a scalar or a vector")
    if x.shape is Shape.SCL:
        if mean.shape is not Shape.SCL or sigma.shape is not Shape.SCL:
            raise ValueError("a scalar x needs a scalar mean and a scalar sigma")
        return
    if mean.shape is Shape.MAT:
        raise ValueError("mean must be a scalar or a vector")
    if mean.shape is Shape.VEC and mean.rows != x.rows:
        raise ValueError(f"size mismatch: x has {x.rows} entries, mean has {mean.rows}")
    if sigma.shape is Shape.VEC and sigma.rows != x.rows:
        raise ValueError(f"size mismatch: x has {x.rows} entries, sigma has {sigma.rows}")
    if sigma.shape is Shape.MAT:
        if sigma.rows != sigma.cols:
            raise ValueError("a covariance matrix must be square")
        if sigma.rows != x.rows:
            raise ValueError(
                f"size mismatch: x has {x.rows} entries, sigma is {sigma.rows}x{sigma.cols}"
            )


def _symmetric_from_lower(matrix: np.ndarray) -> np.ndarray:
    """Build the symmetric matrix that the lower triangle describes."""
    return np.tril(matrix) + np.tril(matrix, -1).T


class NormalAdjLogPDFNode(Expr):
    """Normal log-density of x given mean and sigma; always a scalar.

    Allowed shapes: all scalars, or a vector x with a scalar or vector mean
    and a sigma that is a scalar or vector of standard deviations, or a
    covariance matrix.  A non-positive sigma or a covariance matrix that is
    not positive definite gives -infinity.  Only the lower triangle of a
    covariance matrix is read.
    """

    def __init__(self, x: Expr, mean: Expr, sigma: Expr):
        if not all(isinstance(e, Expr) for e in (x, mean, sigma)):
            raise TypeError("x, mean and sigma must be expressions")
        _check_shapes(x, mean, sigma)
        super().__init__(Shape.SCL)
        self.x = x
        self.mean = mean
        self.sigma = sigma
        self._pos_def = False
        self._inv = None
        self._z = None

    def _diff(self) -> np.ndarray:
        return np.asarray(self.x.value, dtype=float) - np.asarray(self.mean.value, dtype=float)

    def _pass_mean(self, grad) -> None:
        if self.mean.shape is Shape.SCL:
            self.mean.beval(float(np.sum(grad)))
        else:
            self.mean.beval(grad)

    def _pass_x(self, grad) -> None:
        if self.x.shape is Shape.SCL:
            self.x.beval(_scalar(grad))
        else:
            self.x.beval(grad)

    # scalar sigma

    def _feval_scalar_sigma(self) -> float:
        s = _scalar(self.sigma.value)
        if s <= 0:
            return NEG_INF
        diff = self._diff()
        z_sq = float(np.sum(diff * diff)) / (s * s)
        return -0.5 * z_sq - self.x.rows * math.log(s)

    def _beval_scalar_sigma(self, seed: float) -> None:
        s = _scalar(self.sigma.value)
        if s <= 0:
            return
        inv_s = 1.0 / s
        inv_s_sq = inv_s * inv_s
        diff = self._diff()
        z_sq = float(np.sum(diff * diff)) * inv_s_sq
        self.sigma.beval(seed * (z_sq - self.x.rows) * inv_s)
        self._pass_mean(seed * inv_s_sq * diff)
        self._pass_x(-seed * inv_s_sq * diff)

    # vector of standard deviations

    def _feval_vector_sigma(self) -> float:
        s = np.asarray(self.sigma.value, dtype=float)
        if not bool(np.all(s > 0)):
            return NEG_INF
        z = self._diff() / s
        return -0.5 * float(np.sum(z * z)) - float(np.sum(np.log(s)))

    def _beval_vector_sigma(self, seed: float) -> None:
        s = np.asarray(self.sigma.value, dtype=float)
        if not bool(np.all(s > 0)):
            return
        diff = self._diff()
        z = diff / s
        self.sigma.beval((seed / s) * (z * z - 1.0))
        self._pass_mean(seed * diff / (s * s))
        self.x.beval(-seed * diff / (s * s))

    # covariance matrix

    def _feval_matrix_sigma(self) -> float:
        cov = _symmetric_from_lower(np.asarray(self.sigma.value, dtype=float))
        try:
            lower = np.linalg.cholesky(cov)
        except np.linalg.LinAlgError:
            self._pos_def = False
            return NEG_INF
        diag = np.diag(lower)
        if not bool(np.all(np.isfinite(lower))) or not bool(np.all(diag > 0)):
            self._pos_def = False
            return NEG_INF
        self._pos_def = True
        lower_inv = np.linalg.inv(lower)
        self._inv = lower_inv.T @ lower_inv
        diff = self._diff()
        self._z = self._inv @ diff
        log_det = float(np.sum(np.log(diag)))
        return -0.5 * float(diff @ self._z) - log_det

    def _beval_matrix_sigma(self, seed: float) -> None:
        if not self._pos_def or self._z is None:
            return
        z = self._z
        self.sigma.beval(-0.5 * seed * (self._inv - np.outer(z, z)))
        self._pass_mean(seed * z)
        self.x.beval(-seed * z)

    def feval(self):
        """Evaluate x, mean and sigma and return the log-density."""
        self.x.feval()
        self.mean.feval()
        self.sigma.feval()
        if self.sigma.shape is Shape.SCL:
            self.value = self._feval_scalar_sigma()
        elif self.sigma.shape is Shape.VEC:
            self.value = self._feval_vector_sigma()
        else:
            self.value = self._feval_matrix_sigma()
        return self.value

    def beval(self, seed):
        """Pass seed times each partial derivative on to sigma, mean and x."""
        seed = _scalar(seed)
        if seed == 0:
            return
        if self.sigma.shape is Shape.SCL:
            self._beval_scalar_sigma(seed)
        elif self.sigma.shape is Shape.VEC:
            self._beval_vector_sigma(seed)
        else:
            self._beval_matrix_sigma(seed)

    def __repr__(self) -> str:
        return f"NormalAdjLogPDFNode({self.x!r}, {self.mean!r}, {self.sigma!r})"


def normal_adj_log_pdf(x, mean, sigma) -> NormalAdjLogPDFNode:
    """Build the normal log-density of x given mean and sigma."""
    if not any(isinstance(e, Expr) for e in (x, mean, sigma)):
        raise TypeError("at least one argument must be an expression")
    return NormalAdjLogPDFNode(to_expr(x), to_expr(mean), to_expr(sigma))