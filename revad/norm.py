"""Squared norm of a vector or matrix expression."""

from __future__ import annotations

import numpy as np

from .expr import Constant, Expr, is_constant
from .shapes import Shape


def _squared_norm(value) -> float:
    arr = np.asarray(value, dtype=float)
    return float(np.sum(arr * arr))


class NormNode(Expr):
    """Squared Euclidean (Frobenius for matrices) norm; always a scalar."""

    def __init__(self, expr: Expr):
        if not isinstance(expr, Expr):
            raise TypeError("expr must be an expression")
        if expr.shape is Shape.SCL:
            raise ValueError("norm needs a vector or matrix expression")
        super().__init__(Shape.SCL)
        self.expr = expr

    def feval(self):
        """Evaluate the expression and return its squared norm."""
        self.value = _squared_norm(self.expr.feval())
        return self.value

    def beval(self, seed):
        """Pass seed * 2 * x on to the expression."""
        seed = float(np.asarray(seed, dtype=float).reshape(()))
        self.expr.beval(seed * 2.0 * np.asarray(self.expr.value, dtype=float))

    def __repr__(self) -> str:
        return f"NormNode({self.expr!r})"


def norm(x) -> Expr:
    """Build the squared norm of x, folding it when x is constant."""
    if not isinstance(x, Expr):
        raise TypeError("x must be an expression")
    if is_constant(x):
        if x.shape is Shape.SCL:
            raise ValueError("norm needs a vector or matrix expression")
        return Constant(_squared_norm(x.value))
    return NormNode(x)