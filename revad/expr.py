"""Base expression type, variables and constants."""

from __future__ import annotations

import numpy as np

from .shapes import Shape, shape_of


def _as_value(value):
    """Convert a number or array-like into a float or a float array."""
    shape = shape_of(value)
    if shape is Shape.SCL:
        return float(np.asarray(value, dtype=float))
    return np.array(value, dtype=float)


def _dims(shape: Shape, value) -> tuple[int, int]:
    if shape is Shape.SCL:
        return 1, 1
    if shape is Shape.VEC:
        return value.shape[0], 1
    return value.shape[0], value.shape[1]


class Expr:
    """A node of an expression graph holding a value and an adjoint."""

    # Make numpy defer to our reflected operators.
    __array_ufunc__ = None

    def __init__(self, shape: Shape, rows: int = 1, cols: int = 1):
        if not isinstance(shape, Shape):
            raise TypeError("shape must be a Shape")
        if rows < 0 or cols < 0:
            raise ValueError("rows and cols must be non-negative")
        if shape is Shape.SCL:
            rows, cols = 1, 1
        elif shape is Shape.VEC:
            cols = 1
        self.shape = shape
        self.rows = int(rows)
        self.cols = int(cols)
        self.value = self._zeros()
        self.adj = self._zeros()

    @property
    def size(self) -> int:
        """Number of elements."""
        return self.rows * self.cols

    def _zeros(self):
        if self.shape is Shape.SCL:
            return 0.0
        if self.shape is Shape.VEC:
            return np.zeros(self.rows)
        return np.zeros((self.rows, self.cols))

    def _broadcast(self, seed):
        """Bring a seed to the shape of this expression."""
        if self.shape is Shape.SCL:
            return float(np.asarray(seed, dtype=float).reshape(()))
        out = self._zeros()
        out[...] = seed
        return out

    def feval(self):
        """Return the current value of the expression."""
        return self.value

    def beval(self, seed):
        """Record the seed as the adjoint of this expression."""
        self.adj = self._broadcast(seed)

    def reset_adj(self):
        """Set the adjoint back to zero."""
        self.adj = self._zeros()

    def __add__(self, other):
        from .binary import add
        return add(self, other)

    def __radd__(self, other):
        from .binary import add
        return add(other, self)

    def __sub__(self, other):
        from .binary import sub
        return sub(self, other)

    def __rsub__(self, other):
        from .binary import sub
        return sub(other, self)

    def __mul__(self, other):
        from .binary import mul
        return mul(self, other)

    def __rmul__(self, other):
        from .binary import mul
        return mul(other, self)

    def __truediv__(self, other):
        from .binary import div
        return div(self, other)

    def __rtruediv__(self, other):
        from .binary import div
        return div(other, self)

    def __lt__(self, other):
        from .binary import less
        return less(self, other)

    def __le__(self, other):
        from .binary import less_equal
        return less_equal(self, other)

    def __gt__(self, other):
        from .binary import greater
        return greater(self, other)

    def __ge__(self, other):
        from .binary import greater_equal
        return greater_equal(self, other)


class Var(Expr):
    """A variable that owns its value and accumulates its adjoint."""

    def __init__(self, value=0.0):
        shape = shape_of(value)
        val = _as_value(value)
        rows, cols = _dims(shape, val)
        super().__init__(shape, rows, cols)
        self.value = val

    def feval(self):
        """Return the variable's value."""
        return self.value

    def beval(self, seed):
        """Add the seed to the accumulated adjoint."""
        self.adj = self.adj + self._broadcast(seed)

    def __repr__(self) -> str:
        return f"Var({self.value!r})"


class Constant(Expr):
    """A fixed value; backward evaluation does not touch it."""

    def __init__(self, value):
        shape = shape_of(value)
        val = _as_value(value)
        rows, cols = _dims(shape, val)
        super().__init__(shape, rows, cols)
        self.value = val

    def feval(self):
        """Return the constant's value."""
        return self.value

    def beval(self, seed):
        """Constants have no adjoint, so the seed is dropped."""

    def __repr__(self) -> str:
        return f"Constant({self.value!r})"


def to_expr(x) -> Expr:
    """Return x itself if it is an expression, else wrap it as a Constant."""
    if isinstance(x, Expr):
        return x
    return Constant(x)


def is_constant(x) -> bool:
    """Tell whether x is a constant or a plain value that becomes one."""
    if isinstance(x, Constant):
        return True
    if isinstance(x, Expr):
        return False
    try:
        shape_of(x)
    except (TypeError, ValueError):
        return False
    return True