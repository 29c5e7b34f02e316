import numpy as np
import pytest

from revad.evaluation import autodiff, evaluate, evaluate_adj
from revad.expr import Var
from revad.for_each import ForEachIterNode, for_each
from revad.shapes import Shape


def test_value_is_that_of_the_last_expression():
    x = Var(2.0)
    node = for_each([1.0, 2.0, 3.0], lambda c: x * c)
    assert evaluate(node) == pytest.approx(x.value * 3.0)


def test_every_expression_is_evaluated():
    x = Var(2.0)
    made = []

    def make(c):
        e = x * c
        made.append(e)
        return e

    coefficients = [1.0, 2.0, 3.0]
    evaluate(for_each(coefficients, make))
    assert [e.value for e in made] == pytest.approx([x.value * c for c in coefficients])


def test_only_the_last_expression_is_seeded():
    x = Var(2.0)
    y = Var(5.0)
    node = for_each([y, x], lambda v: v * 3.0)
    autodiff(node)
    assert x.adj == pytest.approx(3.0)
    assert y.adj == 0.0


def test_empty_sequence_is_a_no_op():
    calls = []
    node = for_each([], calls.append)
    assert evaluate(node) == 0.0
    evaluate_adj(node)
    assert calls == []
    assert node.exprs == []


def test_vector_expressions():
    v = Var([1.0, 2.0])
    node = for_each([2.0, 4.0], lambda c: v * c)
    assert node.shape is Shape.VEC
    value = autodiff(node, np.ones(2))
    np.testing.assert_allclose(value, v.value * 4.0)
    np.testing.assert_allclose(v.adj, [4.0, 4.0])


def test_generator_input_and_plain_values():
    node = for_each((c for c in [1.0, 2.0]), lambda c: c)
    assert evaluate(node) == pytest.approx(2.0)
    assert len(node.exprs) == 2


def test_node_rejects_non_expressions():
    with pytest.raises(TypeError):
        ForEachIterNode([1.0])