"""Forward and backward evaluation of expressions."""

from __future__ import annotations

import numpy as np

from .expr import Expr
from .shapes import Shape, shape_of


def _require_expr(expr) -> None:
    if not isinstance(expr, Expr):
        raise TypeError(f"expected an expression, got {type(expr).__name__}")


def evaluate(expr):
    """Run the forward pass and return the expression's value."""
    _require_expr(expr)
    return expr.feval()


def evaluate_adj(expr, seed=None) -> None:
    """Run the backward pass.

    A scalar expression is seeded with 1 unless told otherwise; a vector or
    matrix expression needs a seed of its own size.
    """
    _require_expr(expr)
    if expr.shape is Shape.SCL:
        if seed is None:
            seed = 1.0
        elif shape_of(seed) is not Shape.SCL:
            raise ValueError("a scalar expression needs a scalar seed")
        expr.beval(float(np.asarray(seed, dtype=float)))
        return
    if seed is None:
        raise TypeError("a vector or matrix expression needs an explicit seed")
    if shape_of(seed) is Shape.SCL:
        raise TypeError("a vector or matrix expression needs an array seed")
    arr = np.asarray(seed, dtype=float)
    expected = (expr.rows,) if expr.shape is Shape.VEC else (expr.rows, expr.cols)
    if arr.shape != expected:
        raise ValueError(f"seed of shape {arr.shape} does not match {expected}")
    expr.beval(arr)


def autodiff(expr, seed=None):
    """Run the forward then the backward pass; return the forward value."""
    value = evaluate(expr)
    if isinstance(value, np.ndarray):
        value = value.copy()
    evaluate_adj(expr, seed)
    return value