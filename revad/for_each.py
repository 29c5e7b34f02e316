"""Evaluation of a sequence of expressions, keeping the last value."""

from __future__ import annotations

from typing import Callable, Iterable

from .expr import Expr, to_expr
from .shapes import Shape


class ForEachIterNode(Expr):
    """Evaluates expressions in order and takes the value of the last one."""

    def __init__(self, exprs):
        exprs = list(exprs)
        if not all(isinstance(e, Expr) for e in exprs):
            raise TypeError("every item must be an expression")
        if exprs:
            last = exprs[-1]
            super().__init__(last.shape, last.rows, last.cols)
        else:
            super().__init__(Shape.SCL)
        self.exprs = exprs

    def feval(self):
        """Evaluate every expression left to right; return the last value."""
        if not self.exprs:
            return self.value
        for e in self.exprs:
            e.feval()
        self.value = self.exprs[-1].value
        return self.value

    def beval(self, seed):
        """Seed the last expression, then the rest in reverse with a zero seed."""
        if not self.exprs:
            return
        last = self.exprs[-1]
        last.beval(seed)
        self.adj = last.adj
        for e in reversed(self.exprs[:-1]):
            e.beval(0.0)

    def __repr__(self) -> str:
        return f"ForEachIterNode({self.exprs!r})"


def for_each(iterable: Iterable, f: Callable) -> ForEachIterNode:
    """Build a node that evaluates f(item) for every item in order."""
    return ForEachIterNode(to_expr(f(item)) for item in iterable)