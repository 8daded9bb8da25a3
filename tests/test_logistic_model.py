import math

import numpy as np
import pytest

from hybrid.recommender.errors import FeatureDimensionError
from hybrid.recommender.logistic_model import LogisticModel


@pytest.mark.parametrize("coefficient", [1, -1, 3.5, -20, 0])
def test_zero_model_evaluates_to_half(coefficient):
    model = LogisticModel.zeros(4)
    assert model.evaluate(coefficient, [2.0, -1.0, 100.0, 0.3]) == 0.5


def test_evaluate_matches_formula():
    model = LogisticModel(0.5, [1.0, -2.0])
    x = [0.3, 0.1]
    linear = 0.5 + 1.0 * 0.3 - 2.0 * 0.1
    assert model.evaluate(1, x) == pytest.approx(1 / (1 + math.exp(linear)))
    assert model.evaluate(-2, x) == pytest.approx(1 / (1 + math.exp(-2 * linear)))


def test_evaluate_saturates_instead_of_overflowing():
    model = LogisticModel(0.0, [1.0])
    assert model.evaluate(1, [1e6]) == 0.0
    assert model.evaluate(-1, [1e6]) == 1.0


def test_dimension_mismatch_raises():
    model = LogisticModel.zeros(3)
    with pytest.raises(FeatureDimensionError) as exc_info:
        model.evaluate(1, [1.0, 2.0])
    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 2
    assert isinstance(exc_info.value, ValueError)


def test_model_is_immutable():
    model = LogisticModel(1.0, [1.0, 2.0])
    with pytest.raises(AttributeError):
        model.intercept = 2.0
    with pytest.raises(ValueError):
        model.weights[0] = 5.0


def test_weights_are_copied_from_input():
    source = np.array([1.0, 2.0])
    model = LogisticModel(0.0, source)
    source[0] = 99.0
    assert model.weights[0] == 1.0


def test_updated_returns_new_instance():
    model = LogisticModel.zeros(2)
    updated = model.updated(0.5, np.array([2.0, 0.0]))

    assert updated is not model
    assert model == LogisticModel.zeros(2)
    assert updated.intercept == 0.5
    assert updated.weights.tolist() == [1.0, 0.0]


def test_equality_and_to_dict():
    a = LogisticModel(0.1, [1.0, 2.0])
    b = LogisticModel(0.1, [1.0, 2.0])
    assert a == b
    assert a != LogisticModel(0.1, [1.0, 2.5])
    assert a.to_dict() == {'intercept': 0.1, 'weights': [1.0, 2.0]}
