"""Matrix products of expressions."""

from __future__ import annotations

import numpy as np

from .expr import Constant, Expr, is_constant, to_expr
from .shapes import Shape


def _check_operands(lhs: Expr, rhs: Expr) -> None:
    if lhs.shape is not Shape.MAT:
        raise ValueError("the left operand of dot must be a matrix")
    if rhs.shape is Shape.SCL:
        raise ValueError("the right operand of dot must be a vector or a matrix")
    if lhs.cols != rhs.rows:
        raise ValueError(
            f"size mismatch: {lhs.rows}x{lhs.cols} times {rhs.rows}x{rhs.cols}"
        )


def _as_2d(value, rows: int, cols: int) -> np.ndarray:
    return np.asarray(value, dtype=float).reshape(rows, cols)


def _product(lhs: Expr, rhs: Expr, left, right) -> np.ndarray:
    out = _as_2d(left, lhs.rows, lhs.cols) @ _as_2d(right, rhs.rows, rhs.cols)
    if rhs.shape is Shape.VEC:
        return out.ravel()
    return out


class DotNode(Expr):
    """Product of a matrix with a column vector or with another matrix."""

    def __init__(self, lhs: Expr, rhs: Expr):
        if not isinstance(lhs, Expr) or not isinstance(rhs, Expr):
            raise TypeError("both operands must be expressions")
        _check_operands(lhs, rhs)
        shape = Shape.VEC if rhs.shape is Shape.VEC else Shape.MAT
        super().__init__(shape, lhs.rows, rhs.cols)
        self.lhs = lhs
        self.rhs = rhs

    def feval(self):
        """Evaluate both operands and multiply them."""
        left = self.lhs.feval()
        right = self.rhs.feval()
        self.value = self._broadcast(_product(self.lhs, self.rhs, left, right))
        return self.value

    def beval(self, seed):
        """Pass seed @ B.T to the left operand and A.T @ seed to the right."""
        self.adj = self._broadcast(seed)
        adj = _as_2d(self.adj, self.rows, self.cols)
        left = _as_2d(self.lhs.value, self.lhs.rows, self.lhs.cols)
        right = _as_2d(self.rhs.value, self.rhs.rows, self.rhs.cols)
        lhs_seed = adj @ right.T
        rhs_seed = left.T @ adj
        if self.rhs.shape is Shape.VEC:
            rhs_seed = rhs_seed.ravel()
        self.rhs.beval(rhs_seed)
        self.lhs.beval(lhs_seed)

    def __repr__(self) -> str:
        return f"DotNode({self.lhs!r}, {self.rhs!r})"


def dot(x, y) -> Expr:
    """Build the matrix product x @ y, folding it when both sides are constant."""
    if not isinstance(x, Expr) and not isinstance(y, Expr):
        raise TypeError("at least one operand must be an expression")
    lhs = to_expr(x)
    rhs = to_expr(y)
    _check_operands(lhs, rhs)
    if is_constant(lhs) and is_constant(rhs):
        return Constant(_product(lhs, rhs, lhs.value, rhs.value))
    return DotNode(lhs, rhs)