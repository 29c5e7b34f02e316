"""Sums over many expressions and over the elements of one expression."""

from __future__ import annotations

from typing import Callable, Iterable

import numpy as np

from .expr import Constant, Expr, is_constant, to_expr
from .shapes import Shape


class SumIterNode(Expr):
    """Sum of several expressions that share one shape and size."""

    def __init__(self, exprs):
        exprs = list(exprs)
        if not all(isinstance(e, Expr) for e in exprs):
            raise TypeError("every summand must be an expression")
        if exprs:
            first = exprs[0]
            for e in exprs[1:]:
                if (e.shape, e.rows, e.cols) != (first.shape, first.rows, first.cols):
                    raise ValueError("all summands must have the same shape and size")
            super().__init__(first.shape, first.rows, first.cols)
        else:
            super().__init__(Shape.SCL)
        self.exprs = exprs

    def feval(self):
        """Evaluate every summand left to right and add up the results."""
        total = self._zeros()
        for e in self.exprs:
            total = total + e.feval()
        self.value = self._broadcast(total)
        return self.value

    def beval(self, seed):
        """Pass the same seed to every summand, right to left."""
        if not self.exprs:
            return
        self.adj = self._broadcast(seed)
        for e in reversed(self.exprs):
            e.beval(self.adj)

    def __repr__(self) -> str:
        return f"SumIterNode({self.exprs!r})"


class SumElemNode(Expr):
    """Sum of all elements of one expression; always a scalar."""

    def __init__(self, expr: Expr):
        if not isinstance(expr, Expr):
            raise TypeError("expr must be an expression")
        super().__init__(Shape.SCL)
        self.expr = expr

    def feval(self):
        """Evaluate the expression and add up its elements."""
        res = self.expr.feval()
        self.value = float(np.sum(res))
        return self.value

    def beval(self, seed):
        """Pass the seed to every element of the expression."""
        self.expr.beval(seed)

    def __repr__(self) -> str:
        return f"SumElemNode({self.expr!r})"


def sum_over(iterable: Iterable, f: Callable) -> Expr:
    """Sum f(item) over the items.

    When every term is constant the sum is folded into a Constant; an empty
    iterable gives the constant 0.
    """
    terms = [f(item) for item in iterable]
    if not terms:
        return Constant(0.0)
    if all(is_constant(t) for t in terms):
        values = [to_expr(t).value for t in terms]
        total = values[0]
        for v in values[1:]:
            total = total + v
        return Constant(total)
    return SumIterNode(to_expr(t) for t in terms)


def sum_elements(x) -> Expr:
    """Sum all elements of an expression, folding constants."""
    if not isinstance(x, Expr):
        raise TypeError("x must be an expression")
    if is_constant(x):
        if x.shape is Shape.SCL:
            return x
        return Constant(float(np.sum(x.value)))
    return SumElemNode(x)