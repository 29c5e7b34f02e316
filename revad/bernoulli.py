"""Bernoulli log-density, keeping every term."""

from __future__ import annotations

import math

import numpy as np

from .expr import Expr, to_expr
from .shapes import NEG_INF, Shape


def _scalar(value) -> float:
    return float(np.asarray(value, dtype=float).reshape(()))


def _check_shapes(x: Expr, p: Expr) -> None:
    if x.shape is Shape.MAT or p.shape is Shape.MAT:
        raise ValueError("bernoulli log-pdf does not take matrices")
    if x.shape is Shape.SCL and p.shape is not Shape.SCL:
        raise ValueError("a scalar x needs a scalar p")
    if x.shape is Shape.VEC and p.shape is Shape.VEC and x.rows != p.rows:
        raise ValueError(f"size mismatch: x has {x.rows} entries, p has {p.rows}")


def _within_range(p: float) -> bool:
    return 0.0 < p < 1.0


class BernoulliAdjLogPDFNode(Expr):
    """Log of the Bernoulli probability mass of x given p; always a scalar.

    x may be a scalar with a scalar p, or a vector with a scalar or vector p.
    Values of p outside (0, 1) are treated as clipped to [0, 1].  Only p
    receives an adjoint.
    """

    def __init__(self, x: Expr, p: Expr):
        if not isinstance(x, Expr) or not isinstance(p, Expr):
            raise TypeError("x and p must be expressions")
        _check_shapes(x, p)
        super().__init__(Shape.SCL)
        self.x = x
        self.p = p

    def _x_stats(self) -> tuple[bool, float]:
        xs = np.asarray(self.x.value, dtype=float)
        zero_one = bool(np.all((xs == 0) | (xs == 1)))
        return zero_one, float(np.sum(xs))

    def _feval_scalar(self) -> float:
        x = _scalar(self.x.value)
        p = _scalar(self.p.value)
        if not _within_range(p):
            if p <= 0:
                return 0.0 if x == 0 else NEG_INF
            return 0.0 if x == 1 else NEG_INF
        if x == 0:
            return math.log(1.0 - p)
        if x == 1:
            return math.log(p)
        return NEG_INF

    def _feval_vec_scalar(self) -> float:
        p = _scalar(self.p.value)
        n = self.x.rows
        zero_one, x_sum = self._x_stats()
        if not _within_range(p):
            if p <= 0:
                return 0.0 if (x_sum == 0 and zero_one) else NEG_INF
            return 0.0 if (x_sum == n and zero_one) else NEG_INF
        if not zero_one:
            return NEG_INF
        return x_sum * math.log(p) + (n - x_sum) * math.log(1.0 - p)

    def _feval_vec_vec(self) -> float:
        xs = np.asarray(self.x.value, dtype=float)
        ps = np.asarray(self.p.value, dtype=float)
        zero_one, _ = self._x_stats()
        if not zero_one:
            return NEG_INF
        if not bool(np.all((ps > 0) & (ps < 1))):
            total = 0.0
            for xi, pi in zip(xs, ps):
                if pi <= 0 and xi != 0:
                    return NEG_INF
                if pi >= 1 and xi != 1:
                    return NEG_INF
                if 0 < pi < 1:
                    total += math.log(pi) if xi == 1 else math.log(1.0 - pi)
            return total
        with np.errstate(all="ignore"):
            return float(np.sum(np.log(xs * ps + (1.0 - xs) * (1.0 - ps))))

    def feval(self):
        """Evaluate x and p and return the log-probability."""
        self.x.feval()
        self.p.feval()
        if self.x.shape is Shape.SCL:
            self.value = self._feval_scalar()
        elif self.p.shape is Shape.SCL:
            self.value = self._feval_vec_scalar()
        else:
            self.value = self._feval_vec_vec()
        return self.value

    def beval(self, seed):
        """Pass seed times the derivative with respect to p on to p."""
        seed = _scalar(seed)
        if seed == 0:
            return
        if self.x.shape is Shape.SCL:
            x = _scalar(self.x.value)
            p = _scalar(self.p.value)
            if not _within_range(p) or x not in (0.0, 1.0):
                return
            self.p.beval(-seed / (1.0 - p) if x == 0 else seed / p)
            return
        zero_one, x_sum = self._x_stats()
        if not zero_one:
            return
        if self.p.shape is Shape.SCL:
            p = _scalar(self.p.value)
            if not _within_range(p):
                return
            adj = (x_sum - self.x.rows * p) / (p * (1.0 - p))
            self.p.beval(seed * adj)
            return
        xs = np.asarray(self.x.value, dtype=float)
        ps = np.asarray(self.p.value, dtype=float)
        inside = (ps > 0) & (ps < 1)
        with np.errstate(all="ignore"):
            grad = np.where(xs == 1, seed / ps, -seed / (1.0 - ps))
        self.p.beval(np.where(inside, grad, 0.0))

    def __repr__(self) -> str:
        return f"BernoulliAdjLogPDFNode({self.x!r}, {self.p!r})"


def bernoulli_adj_log_pdf(x, p) -> BernoulliAdjLogPDFNode:
    """Build the Bernoulli log-pdf of x given p."""
    if not isinstance(x, Expr) and not isinstance(p, Expr):
        raise TypeError("at least one argument must be an expression")
    return BernoulliAdjLogPDFNode(to_expr(x), to_expr(p))