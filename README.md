# revad

Reverse-mode automatic differentiation for expressions built from scalars,
vectors and matrices, backed by numpy.

An expression is built from `Var` objects, which own a value and an adjoint,
and from plain numbers or arrays, which become `Constant`s. The forward pass
(`feval`) computes and caches the value of every node; the backward pass
(`beval`) passes seeds down the graph and adds partial derivatives into the
adjoint (`adj`) of every `Var` the expression depends on.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## A first example

```python
from revad.expr import Var
from revad.evaluation import autodiff

x = Var(2.0)
y = Var(3.0)

f = x * y + x / y
value = autodiff(f)      # forward pass, then backward pass with seed 1

print(value)             # 6.666...
print(x.adj, y.adj)      # df/dx = y + 1/y, df/dy = x - x/y**2
```

Adjoints of a `Var` accumulate across backward passes. Call `reset_adj()` on
each variable before differentiating again.

## Building blocks

| Module              | What it gives you                                                      |
|---------------------|------------------------------------------------------------------------|
| `revad.shapes`      | `Shape` (`SCL`, `VEC`, `MAT`), `max_shape`, `shape_of`                 |
| `revad.expr`        | `Expr`, `Var`, `Constant`, `to_expr`, `is_constant`; the operators `+ - * /` and `< <= > >=` on expressions |
| `revad.binary`      | `BinaryOp`, `BinaryNode`, `binary`, `add`, `sub`, `mul`, `div`, `less`, `less_equal`, `greater`, `greater_equal`, `equal`, `not_equal`, `logical_and`, `logical_or` |
| `revad.glue`        | `glue(*exprs)`: evaluate expressions left to right, take the last one's value |
| `revad.power`       | `power(x, exp)` for an integer exponent, `int_pow(base, exp)`          |
| `revad.summation`   | `sum_over(iterable, f)`, `sum_elements(x)`                             |
| `revad.norm`        | `norm(x)`: squared Euclidean (Frobenius for matrices) norm             |
| `revad.dot`         | `dot(x, y)`: matrix-vector and matrix-matrix products                  |
| `revad.for_each`    | `for_each(iterable, f)`: evaluate a sequence of expressions            |
| `revad.if_else`     | `if_else(cond, if_expr, else_expr)` with a scalar condition            |
| `revad.evaluation`  | `evaluate`, `evaluate_adj`, `autodiff`                                 |
| `revad.bernoulli`   | `bernoulli_adj_log_pdf(x, p)`                                          |
| `revad.normal`      | `normal_adj_log_pdf(x, mean, sigma)`                                   |

Notes on the builders:

- When every operand is constant, `binary` (and the functions built on it),
  `dot`, `if_else`, `power`, `sum_over`, `sum_elements` and `norm` evaluate
  at once and return a `Constant`.
- `power`, `sum_elements` and `norm` take an expression; pass a `Constant`
  to use them on a plain value.
- Comparisons and logical operations give 1.0 or 0.0 and pass no derivative
  back. `logical_and` and `logical_or` are the element-wise minimum and
  maximum for arrays.
- `power` follows the conventions `0**0 == 1` and `0**n == inf` for `n < 0`.
  A zero base with a negative exponent passes `-inf` back as its seed.
- `sum_over` over an empty iterable gives the constant 0.

## Evaluation

- `evaluate(expr)` runs the forward pass and returns the value.
- `evaluate_adj(expr, seed=None)` runs the backward pass. A scalar
  expression is seeded with 1 by default; a vector or matrix expression
  needs a seed array of exactly its size.
- `autodiff(expr, seed=None)` does both and returns the forward value.

## Vectors and matrices

```python
import numpy as np
from revad.expr import Var
from revad.dot import dot
from revad.norm import norm
from revad.evaluation import autodiff

A = Var(np.array([[1.0, 2.0], [3.0, 4.0]]))
v = Var(np.array([1.0, -1.0]))

f = norm(dot(A, v))
autodiff(f)
print(A.adj)
print(v.adj)
```

One-dimensional arrays are column vectors and two-dimensional arrays are
matrices. Binary operations are element-wise: one side may be a scalar,
otherwise both sides must have the same shape and size, or a `ValueError`
is raised. The left operand of `dot` must be a matrix.

## Log-densities

`normal_adj_log_pdf` drops the constant `-n/2 * log(2*pi)` term;
`bernoulli_adj_log_pdf` keeps every term. Both are scalar expressions.

```python
import numpy as np
from revad.expr import Var
from revad.normal import normal_adj_log_pdf
from revad.evaluation import autodiff

mu = Var(0.0)
sigma = Var(1.5)
data = np.array([0.3, -0.2, 1.1])

lp = normal_adj_log_pdf(data, mu, sigma)
autodiff(lp)
print(mu.adj, sigma.adj)
```

- Normal: `x` is a scalar (with scalar `mean` and `sigma`) or a vector.
  With a vector `x`, `mean` is a scalar or a vector, and `sigma` is a
  scalar or vector of standard deviations, or a covariance matrix of which
  only the lower triangle is read. A non-positive standard deviation or a
  covariance matrix that is not positive definite gives negative infinity,
  and the backward pass then leaves all adjoints alone.
- Bernoulli: `x` is a scalar with a scalar `p`, or a vector with a scalar or
  vector `p`. Values of `p` outside `(0, 1)` are treated as clipped to
  `[0, 1]`; an `x` that is impossible under `p`, or that is not 0 or 1,
  gives negative infinity. Only `p` receives an adjoint, and entries of `p`
  outside `(0, 1)` receive none.

## What the package does not do

There are no element-wise functions such as `exp`, `log`, `sqrt` or `erf`,
no distributions other than the normal and Bernoulli ones, and no
second derivatives. There is no command-line tool; the package is a library
only.