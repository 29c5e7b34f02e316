"""Sequencing of expressions that must be evaluated in order."""

from __future__ import annotations

from functools import reduce

from .expr import Expr, to_expr


class GlueNode(Expr):
    """Evaluates the left expression, then the right, and takes the right's value."""

    def __init__(self, lhs: Expr, rhs: Expr):
        if not isinstance(lhs, Expr) or not isinstance(rhs, Expr):
            raise TypeError("both parts must be expressions")
        super().__init__(rhs.shape, rhs.rows, rhs.cols)
        self.lhs = lhs
        self.rhs = rhs

    def feval(self):
        """Evaluate left then right; return the right expression's value."""
        self.lhs.feval()
        self.value = self.rhs.feval()
        return self.value

    def beval(self, seed):
        """Seed the right expression, then run the left with a zero seed."""
        self.rhs.beval(seed)
        self.adj = self.rhs.adj
        self.lhs.beval(0.0)

    def __repr__(self) -> str:
        return f"GlueNode({self.lhs!r}, {self.rhs!r})"


def glue(*args) -> Expr:
    """Chain expressions left to right into nested glue nodes."""
    if not args:
        raise ValueError("glue needs at least one expression")
    if not any(isinstance(arg, Expr) for arg in args):
        raise TypeError("at least one argument must be an expression")
    exprs = [to_expr(arg) for arg in args]
    return reduce(GlueNode, exprs)