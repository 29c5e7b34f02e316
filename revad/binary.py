"""Element-wise binary operations on expressions."""

from __future__ import annotations

import enum

import numpy as np

from .expr import Constant, Expr, is_constant, to_expr
from .shapes import Shape, max_shape


def _reduce_to(grad, target):
    """Sum a gradient down to a scalar when its target is a scalar."""
    if np.ndim(target) == 0 and np.ndim(grad) > 0:
        return float(np.sum(grad))
    return grad


def _logical(x, y, elementwise, scalar):
    if np.ndim(x) == 0 and np.ndim(y) == 0:
        return scalar(x, y)
    return elementwise(x, y)


class BinaryOp(enum.Enum):
    """A binary operation with its forward map and partial derivatives."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "!="
    LOGICAL_AND = "&&"
    LOGICAL_OR = "||"

    @property
    def is_comparison(self) -> bool:
        """True for operations whose derivative is zero by convention."""
        return self not in (BinaryOp.ADD, BinaryOp.SUB, BinaryOp.MUL, BinaryOp.DIV)

    def fmap(self, x, y):
        """Evaluate the operation on two values."""
        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        with np.errstate(all="ignore"):
            if self is BinaryOp.ADD:
                return x + y
            if self is BinaryOp.SUB:
                return x - y
            if self is BinaryOp.MUL:
                return x * y
            if self is BinaryOp.DIV:
                return np.divide(x, y)
            if self is BinaryOp.LESS:
                return x < y
            if self is BinaryOp.LESS_EQUAL:
                return x <= y
            if self is BinaryOp.GREATER:
                return x > y
            if self is BinaryOp.GREATER_EQUAL:
                return x >= y
            if self is BinaryOp.EQUAL:
                return x == y
            if self is BinaryOp.NOT_EQUAL:
                return x != y
            if self is BinaryOp.LOGICAL_AND:
                return _logical(x, y, np.minimum, np.logical_and)
            return _logical(x, y, np.maximum, np.logical_or)

    def blmap(self, seed, x, y, f):
        """Seed times the partial derivative with respect to the left operand."""
        if self is BinaryOp.ADD or self is BinaryOp.SUB:
            grad = seed
        elif self is BinaryOp.MUL:
            grad = seed * y
        elif self is BinaryOp.DIV:
            with np.errstate(all="ignore"):
                grad = np.divide(seed, y)
        else:
            return 0.0
        return _reduce_to(grad, x)

    def brmap(self, seed, x, y, f):
        """Seed times the partial derivative with respect to the right operand."""
        if self is BinaryOp.ADD:
            grad = seed
        elif self is BinaryOp.SUB:
            grad = -np.asarray(seed, dtype=float)
        elif self is BinaryOp.MUL:
            grad = seed * x
        elif self is BinaryOp.DIV:
            with np.errstate(all="ignore"):
                grad = np.divide(-np.asarray(seed, dtype=float) * f, y)
        else:
            return 0.0
        return _reduce_to(grad, y)


def _check_shapes(lhs: Expr, rhs: Expr) -> None:
    if lhs.shape is Shape.SCL or rhs.shape is Shape.SCL:
        return
    if lhs.shape is not rhs.shape:
        raise ValueError(
            f"cannot combine {lhs.shape.name.lower()} with {rhs.shape.name.lower()}"
        )
    if (lhs.rows, lhs.cols) != (rhs.rows, rhs.cols):
        raise ValueError(
            f"size mismatch: {lhs.rows}x{lhs.cols} and {rhs.rows}x{rhs.cols}"
        )


class BinaryNode(Expr):
    """Applies a vectorised binary operation to two expressions."""

    def __init__(self, op: BinaryOp, lhs: Expr, rhs: Expr):
        if not isinstance(op, BinaryOp):
            raise TypeError("op must be a BinaryOp")
        if not isinstance(lhs, Expr) or not isinstance(rhs, Expr):
            raise TypeError("both operands must be expressions")
        _check_shapes(lhs, rhs)
        super().__init__(
            max_shape(lhs.shape, rhs.shape),
            max(lhs.rows, rhs.rows),
            max(lhs.cols, rhs.cols),
        )
        self.op = op
        self.lhs = lhs
        self.rhs = rhs

    def feval(self):
        """Evaluate both operands, apply the operation and cache the result."""
        left = self.lhs.feval()
        right = self.rhs.feval()
        self.value = self._broadcast(self.op.fmap(left, right))
        return self.value

    def beval(self, seed):
        """Pass seed times each partial derivative on to the operands."""
        if self.op.is_comparison:
            return
        self.adj = self._broadcast(seed)
        rhs_seed = self.op.brmap(self.adj, self.lhs.value, self.rhs.value, self.value)
        lhs_seed = self.op.blmap(self.adj, self.lhs.value, self.rhs.value, self.value)
        self.rhs.beval(rhs_seed)
        self.lhs.beval(lhs_seed)

    def __repr__(self) -> str:
        return f"BinaryNode({self.op.value!r}, {self.lhs!r}, {self.rhs!r})"


def binary(op: BinaryOp, lhs, rhs) -> Expr:
    """Build a binary expression, folding it when both sides are constant."""
    if not isinstance(lhs, Expr) and not isinstance(rhs, Expr):
        raise TypeError("at least one operand must be an expression")
    left = to_expr(lhs)
    right = to_expr(rhs)
    _check_shapes(left, right)
    if is_constant(left) and is_constant(right):
        return Constant(np.asarray(op.fmap(left.value, right.value), dtype=float))
    return BinaryNode(op, left, right)


def add(x, y) -> Expr:
    """x + y."""
    return binary(BinaryOp.ADD, x, y)


def sub(x, y) -> Expr:
    """x - y."""
    return binary(BinaryOp.SUB, x, y)


def mul(x, y) -> Expr:
    """Element-wise x * y."""
    return binary(BinaryOp.MUL, x, y)


def div(x, y) -> Expr:
    """Element-wise x / y."""
    return binary(BinaryOp.DIV, x, y)


def less(x, y) -> Expr:
    """x < y as 1.0 or 0.0."""
    return binary(BinaryOp.LESS, x, y)


def less_equal(x, y) -> Expr:
    """x <= y as 1.0 or 0.0."""
    return binary(BinaryOp.LESS_EQUAL, x, y)


def greater(x, y) -> Expr:
    """x > y as 1.0 or 0.0."""
    return binary(BinaryOp.GREATER, x, y)


def greater_equal(x, y) -> Expr:
    """x >= y as 1.0 or 0.0."""
    return binary(BinaryOp.GREATER_EQUAL, x, y)


def equal(x, y) -> Expr:
    """x == y as 1.0 or 0.0."""
    return binary(BinaryOp.EQUAL, x, y)


def not_equal(x, y) -> Expr:
    """x != y as 1.0 or 0.0."""
    return binary(BinaryOp.NOT_EQUAL, x, y)


def logical_and(x, y) -> Expr:
    """Logical and; element-wise minimum for arrays."""
    return binary(BinaryOp.LOGICAL_AND, x, y)


def logical_or(x, y) -> Expr:
    """Logical or; element-wise maximum for arrays."""
    return binary(BinaryOp.LOGICAL_OR, x, y)