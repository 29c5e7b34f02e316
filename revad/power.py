"""Integer powers of expressions."""

from __future__ import annotations

import math
import numbers

import numpy as np

from .expr import Constant, Expr, is_constant
from .shapes import Shape


def _check_exponent(exp) -> int:
    if isinstance(exp, bool) or not isinstance(exp, numbers.Integral):
        raise TypeError("the exponent must be an integer")
    return int(exp)


def _pos_pow(base: float, exp: int) -> float:
    if exp == 0:
        return 1.0
    if exp % 2 == 0:
        half = _pos_pow(base, exp // 2)
        return half * half
    return base * _pos_pow(base, exp - 1)


def int_pow(base, exp) -> float:
    """Raise a scalar to an integer power by repeated squaring.

    By convention 0**0 is 1, and 0 raised to a negative power is infinity.
    """
    exp = _check_exponent(exp)
    base = float(base)
    if exp >= 0:
        return _pos_pow(base, exp)
    if base == 0:
        return math.inf
    return _pos_pow(1.0 / base, -exp)


def _array_pow(value, exp: int):
    with np.errstate(all="ignore"):
        return np.power(np.asarray(value, dtype=float), float(exp))


class PowNode(Expr):
    """Raises an expression to a fixed integer power, element-wise."""

    def __init__(self, expr: Expr, exp):
        if not isinstance(expr, Expr):
            raise TypeError("expr must be an expression")
        super().__init__(expr.shape, expr.rows, expr.cols)
        self.expr = expr
        self.exp = _check_exponent(exp)

    def feval(self):
        """Evaluate the base and raise it to the exponent."""
        base = self.expr.feval()
        if self.shape is Shape.SCL:
            self.value = int_pow(base, self.exp)
        else:
            self.value = self._broadcast(_array_pow(base, self.exp))
        return self.value

    def beval(self, seed):
        """Pass seed times exp * x**(exp - 1) on to the base.

        With a negative exponent and a zero base the seed passed on is -infinity.
        """
        if self.exp == 0:
            self.expr.beval(0.0)
            return
        if self.exp == 1:
            self.expr.beval(seed)
            return

        self.adj = self._broadcast(seed)
        a_adj = np.asarray(self.adj, dtype=float)
        a_val = np.asarray(self.value, dtype=float)
        a_expr = np.asarray(self.expr.value, dtype=float)
        zero = a_expr == 0

        with np.errstate(all="ignore"):
            if self.exp > 1:
                ratio = np.where(zero, 0.0, a_val / a_expr)
                grad = self.exp * a_adj * ratio
            else:
                grad = np.where(zero, -math.inf, self.exp * a_adj * a_val / a_expr)

        if self.shape is Shape.SCL:
            grad = float(grad)
        self.expr.beval(grad)

    def __repr__(self) -> str:
        return f"PowNode({self.expr!r}, {self.exp})"


def power(x, exp) -> Expr:
    """Build x**exp for an integer exp, folding it when x is constant."""
    exp = _check_exponent(exp)
    if not isinstance(x, Expr):
        raise TypeError("x must be an expression")
    if is_constant(x):
        if x.shape is Shape.SCL:
            return Constant(int_pow(x.value, exp))
        return Constant(_array_pow(x.value, exp))
    return PowNode(x, exp)