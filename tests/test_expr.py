import numpy as np
import pytest

from revad.expr import Constant, Expr, Var, is_constant, to_expr
from revad.shapes import Shape


def test_scalar_var_value_and_zero_adjoint():
    v = Var(1.75)
    assert v.shape is Shape.SCL
    assert v.feval() == 1.75
    assert v.adj == 0.0
    assert (v.rows, v.cols, v.size) == (1, 1, 1)


def test_var_accumulates_adjoint():
    v = Var(3.0)
    v.beval(1.5)
    assert v.adj == 1.5
    v.beval(0.25)
    assert v.adj == 1.5 + 0.25


def test_reset_adj():
    v = Var(3.0)
    v.beval(4.0)
    v.reset_adj()
    assert v.adj == 0.0


def test_vector_var():
    v = Var([1.0, 2.0, 3.0])
    assert v.shape is Shape.VEC
    assert (v.rows, v.cols, v.size) == (3, 1, 3)
    np.testing.assert_array_equal(v.feval(), [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(v.adj, np.zeros(3))


def test_vector_var_adjoint_broadcast_and_accumulate():
    v = Var(np.ones(3))
    v.beval(2.0)
    v.beval(np.array([1.0, 0.0, -1.0]))
    np.testing.assert_array_equal(v.adj, np.array([2.0, 2.0, 2.0]) + np.array([1.0, 0.0, -1.0]))


def test_vector_var_rejects_wrong_seed_shape():
    v = Var(np.ones(3))
    with pytest.raises(ValueError):
        v.beval(np.ones(4))


def test_matrix_var():
    m = Var(np.arange(6.0).reshape(2, 3))
    assert m.shape is Shape.MAT
    assert (m.rows, m.cols, m.size) == (2, 3, 6)
    m.beval(np.ones((2, 3)))
    m.reset_adj()
    np.testing.assert_array_equal(m.adj, np.zeros((2, 3)))


def test_var_copies_input_array():
    data = np.array([1.0, 2.0])
    v = Var(data)
    data[0] = 100.0
    np.testing.assert_array_equal(v.value, [1.0, 2.0])


def test_var_rejects_three_dimensional_value():
    with pytest.raises(ValueError):
        Var(np.zeros((2, 2, 2)))


def test_constant_ignores_seed():
    c = Constant([4.0, 5.0])
    c.beval(np.array([1.0, 1.0]))
    np.testing.assert_array_equal(c.adj, np.zeros(2))
    np.testing.assert_array_equal(c.feval(), [4.0, 5.0])


def test_expr_normalises_dimensions():
    scalar = Expr(Shape.SCL, 5, 7)
    vector = Expr(Shape.VEC, 4, 9)
    matrix = Expr(Shape.MAT, 2, 3)
    assert (scalar.rows, scalar.cols) == (1, 1)
    assert (vector.rows, vector.cols) == (4, 1)
    assert matrix.value.shape == (2, 3)


def test_expr_rejects_bad_arguments():
    with pytest.raises(TypeError):
        Expr("scalar", 1, 1)
    with pytest.raises(ValueError):
        Expr(Shape.VEC, -1, 1)


def test_expr_base_beval_sets_adjoint():
    e = Expr(Shape.VEC, 2, 1)
    e.beval(3.0)
    np.testing.assert_array_equal(e.adj, [3.0, 3.0])
    e.beval(1.0)
    np.testing.assert_array_equal(e.adj, [1.0, 1.0])


def test_to_expr():
    v = Var(1.0)
    assert to_expr(v) is v
    c = to_expr(2.5)
    assert isinstance(c, Constant) and c.value == 2.5
    with pytest.raises(TypeError):
        to_expr("text")


def test_is_constant():
    assert is_constant(Constant(1.0))
    assert is_constant(3)
    assert is_constant(np.ones(2))
    assert not is_constant(Var(1.0))
    assert not is_constant("text")


def test_addition_operator_builds_expression():
    x = Var(2.0)
    y = Var(3.0)
    assert (x + y).feval() == pytest.approx(5.0)
    assert (1.0 + x).feval() == pytest.approx(3.0)