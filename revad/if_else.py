"""Conditional choice between two expressions."""

from __future__ import annotations

from .expr import Constant, Expr, is_constant, to_expr
from .shapes import Shape


def _check_parts(cond: Expr, if_expr: Expr, else_expr: Expr) -> None:
    if cond.shape is not Shape.SCL:
        raise ValueError("the condition must be a scalar expression")
    if if_expr.shape is not else_expr.shape:
        raise ValueError("both branches must have the same shape")
    if (if_expr.rows, if_expr.cols) != (else_expr.rows, else_expr.cols):
        raise ValueError("both branches must have the same size")


class IfElseNode(Expr):
    """Evaluates one of two branches depending on a scalar condition."""

    def __init__(self, cond: Expr, if_expr: Expr, else_expr: Expr):
        if not all(isinstance(e, Expr) for e in (cond, if_expr, else_expr)):
            raise TypeError("condition and branches must be expressions")
        _check_parts(cond, if_expr, else_expr)
        super().__init__(if_expr.shape, if_expr.rows, if_expr.cols)
        self.cond = cond
        self.if_expr = if_expr
        self.else_expr = else_expr

    def feval(self):
        """Evaluate the condition, then only the branch it selects."""
        branch = self.if_expr if self.cond.feval() else self.else_expr
        self.value = branch.feval()
        return self.value

    def beval(self, seed):
        """Pass the seed to the branch the last condition selected."""
        branch = self.if_expr if self.cond.value else self.else_expr
        branch.beval(seed)
        self.adj = branch.adj

    def __repr__(self) -> str:
        return f"IfElseNode({self.cond!r}, {self.if_expr!r}, {self.else_expr!r})"


def if_else(cond, if_expr, else_expr) -> Expr:
    """Build a conditional expression, folding it when every part is constant."""
    if not any(isinstance(e, Expr) for e in (cond, if_expr, else_expr)):
        raise TypeError("at least one argument must be an expression")
    c = to_expr(cond)
    i = to_expr(if_expr)
    e = to_expr(else_expr)
    _check_parts(c, i, e)
    if is_constant(c) and is_constant(i) and is_constant(e):
        return Constant(i.value if c.value else e.value)
    return IfElseNode(c, i, e)