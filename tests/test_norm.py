import numpy as np
import pytest

from revad.expr import Constant, Var
from revad.norm import NormNode, norm
from revad.summation import sum_elements


def test_norm_of_three_four_vector():
    assert norm(Var([3.0, 4.0])).feval() == 25.0


def test_norm_matches_sum_of_squares_graph():
    values = [1.5, -2.0, 0.5]
    x = Var(values)
    assert norm(x).feval() == pytest.approx(sum_elements(x * x).feval())


def test_norm_gradient_matches_sum_of_squares_graph():
    values = [1.5, -2.0, 0.5]
    x1 = Var(values)
    n = norm(x1)
    n.feval()
    n.beval(1.0)

    x2 = Var(values)
    s = sum_elements(x2 * x2)
    s.feval()
    s.beval(1.0)
    np.testing.assert_allclose(x1.adj, x2.adj)


def test_norm_matrix_is_frobenius_squared():
    values = [[1.0, 2.0], [-3.0, 0.5]]
    m = Var(values)
    assert norm(m).feval() == pytest.approx(np.linalg.norm(values) ** 2)


def test_norm_gradient_finite_difference():
    values = np.array([0.7, -1.2, 2.1])
    x = Var(values)
    n = norm(x)
    n.feval()
    n.beval(1.0)
    h = 1e-6
    for k in range(values.size):
        up, down = values.copy(), values.copy()
        up[k] += h
        down[k] -= h
        numeric = (norm(Var(up)).feval() - norm(Var(down)).feval()) / (2 * h)
        assert x.adj[k] == pytest.approx(numeric, rel=1e-5)


def test_norm_seed_scales_gradient():
    x1 = Var([1.0, 2.0])
    n1 = norm(x1)
    n1.feval()
    n1.beval(1.0)
    x3 = Var([1.0, 2.0])
    n3 = norm(x3)
    n3.feval()
    n3.beval(3.0)
    np.testing.assert_allclose(x3.adj, 3.0 * x1.adj)


def test_norm_of_constant_is_folded():
    c = norm(Constant([3.0, 4.0]))
    assert isinstance(c, Constant)
    assert c.value == norm(Var([3.0, 4.0])).feval()


def test_norm_builds_node_for_variable():
    node = norm(Var([1.0, 2.0]))
    assert isinstance(node, NormNode)
    assert node.feval() == 5.0


def test_norm_rejects_scalars():
    with pytest.raises(ValueError):
        NormNode(Var(1.0))
    with pytest.raises(ValueError):
        norm(Constant(2.0))


def test_norm_requires_expression():
    with pytest.raises(TypeError):
        norm([3.0, 4.0])