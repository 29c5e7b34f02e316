import numpy as np
import pytest

from revad.evaluation import autodiff, evaluate, evaluate_adj
from revad.expr import Var


def test_evaluate_leaves_adjoints_alone():
    x = Var(2.0)
    y = Var(3.0)
    assert evaluate(x * y) == pytest.approx(x.value * y.value)
    assert x.adj == 0.0


def test_evaluate_adj_uses_unit_seed_by_default():
    x = Var(2.0)
    y = Var(3.0)
    expr = x * y
    evaluate(expr)
    evaluate_adj(expr)
    assert x.adj == pytest.approx(y.value)
    assert y.adj == pytest.approx(x.value)


def test_autodiff_returns_forward_value():
    x = Var(4.0)
    y = Var(-1.5)
    value = autodiff(x / y)
    assert value == pytest.approx(x.value / y.value)
    assert x.adj == pytest.approx(1.0 / y.value)


def test_seed_scales_the_gradient():
    x1 = Var(2.0)
    autodiff(x1 * x1 + x1)
    x2 = Var(2.0)
    autodiff(x2 * x2 + x2, 2.5)
    assert x2.adj == pytest.approx(2.5 * x1.adj)


def test_vector_autodiff():
    v = Var([1.0, 2.0, 3.0])
    seed = np.array([1.0, 0.0, -1.0])
    value = autodiff(v * v, seed)
    np.testing.assert_allclose(value, v.value * v.value)
    np.testing.assert_allclose(v.adj, 2 * seed * v.value)


def test_matrix_autodiff():
    m = Var([[1.0, 2.0], [3.0, 4.0]])
    autodiff(m + 1.0, np.ones((2, 2)))
    np.testing.assert_allclose(m.adj, np.ones((2, 2)))


def test_vector_expression_needs_a_seed():
    v = Var([1.0, 2.0])
    with pytest.raises(TypeError):
        autodiff(v * 2.0)


def test_vector_expression_rejects_scalar_seed():
    v = Var([1.0, 2.0])
    with pytest.raises(TypeError):
        autodiff(v * 2.0, 1.0)


def test_vector_seed_of_wrong_size_raises():
    v = Var([1.0, 2.0])
    expr = v * 2.0
    evaluate(expr)
    with pytest.raises(ValueError):
        evaluate_adj(expr, [1.0, 1.0, 1.0])


def test_scalar_expression_rejects_array_seed():
    x = Var(1.0)
    with pytest.raises(ValueError):
        autodiff(x * 2.0, [1.0, 1.0])


def test_non_expressions_raise():
    with pytest.raises(TypeError):
        evaluate(1.0)
    with pytest.raises(TypeError):
        autodiff("x")