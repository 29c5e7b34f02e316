import numpy as np
import pytest

from revad.evaluation import autodiff, evaluate, evaluate_adj
from revad.expr import Constant, Var
from revad.if_else import IfElseNode, if_else


def test_true_condition_takes_the_if_branch():
    x = Var(3.0)
    node = if_else(x > 2.0, x * x, x + 1.0)
    value = autodiff(node)
    assert value == pytest.approx(x.value * x.value)
    assert x.adj == pytest.approx(2 * x.value)


def test_false_condition_takes_the_else_branch():
    x = Var(1.0)
    node = if_else(x > 2.0, x * x, x * 5.0)
    value = autodiff(node)
    assert value == pytest.approx(x.value * 5.0)
    assert x.adj == pytest.approx(5.0)


def test_untaken_branch_is_not_evaluated():
    x = Var(3.0)
    other = x + 1.0
    node = if_else(x > 2.0, x * 2.0, other)
    evaluate(node)
    assert other.value == 0.0
    evaluate_adj(node)
    assert x.adj == pytest.approx(2.0)


def test_constants_are_folded():
    node = if_else(Constant(0.0), Constant(2.0), Constant(5.0))
    assert isinstance(node, Constant)
    assert node.value == pytest.approx(5.0)


def test_vector_branches():
    v = Var([1.0, -2.0])
    node = if_else(Var(1.0), v * 2.0, v)
    value = autodiff(node, [1.0, 1.0])
    np.testing.assert_allclose(value, v.value * 2.0)
    np.testing.assert_allclose(v.adj, [2.0, 2.0])


def test_plain_value_branch():
    x = Var(0.5)
    node = if_else(x < 1.0, 7.0, x)
    assert evaluate(node) == pytest.approx(7.0)
    evaluate_adj(node)
    assert x.adj == 0.0


def test_vector_condition_raises():
    with pytest.raises(ValueError):
        if_else(Var([1.0, 0.0]), Var(1.0), Var(2.0))


def test_branch_shape_mismatch_raises():
    with pytest.raises(ValueError):
        if_else(Var(1.0), Var([1.0, 2.0]), Var(2.0))


def test_branch_size_mismatch_raises():
    with pytest.raises(ValueError):
        if_else(Var(1.0), Var([1.0, 2.0]), Var([1.0, 2.0, 3.0]))


def test_all_plain_values_raise():
    with pytest.raises(TypeError):
        if_else(1.0, 2.0, 3.0)


def test_node_needs_expressions():
    with pytest.raises(TypeError):
        IfElseNode(1.0, Var(1.0), Var(2.0))