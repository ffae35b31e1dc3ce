"""
Tests for the regression model math.
"""
import numpy as np
import pytest

from regression_lab.errors import (
    DimensionMismatch,
    EmptyInput,
    InvalidDataset,
    ZeroVariance,
)
from regression_lab.model import (
    LOGISTIC,
    PARABOLA_LINEAR,
    SIMPLE_LINEAR,
    get_model,
    sigmoid,
)


class TestWeightsCount:
    """Weight vector size follows the term count."""

    def test_simple_linear(self):
        assert SIMPLE_LINEAR.weights_count(1) == 1
        assert SIMPLE_LINEAR.weights_count(2) == 2
        assert SIMPLE_LINEAR.weights_count(3) == 3

    def test_parabola(self):
        assert PARABOLA_LINEAR.weights_count(1) == 2
        assert PARABOLA_LINEAR.weights_count(2) == 5

    def test_matches_terms(self):
        for model in (SIMPLE_LINEAR, PARABOLA_LINEAR, LOGISTIC, get_model("complex_linear")):
            for n in (1, 2, 3):
                assert model.weights_count(n) == len(model.terms(n))
                assert list(model.default_weights(n)) == [0.0] * model.weights_count(n)


class TestHypothesis:
    """Predictions for single samples."""

    def test_simple_linear(self):
        assert SIMPLE_LINEAR.hypothesis([1], [2], 1) == 3

    def test_parabola_two_features(self):
        assert PARABOLA_LINEAR.hypothesis([1, 2, 1, 2, 3], [2, -1], -1) == 10

    def test_weights_mismatch(self):
        with pytest.raises(DimensionMismatch):
            PARABOLA_LINEAR.hypothesis([1, 2], [2, -1], 0)

    def test_linear_in_weights_and_bias(self):
        x = [1.5, -0.5]
        w1, w2 = np.array([1, -2, 0.5, 3, 1]), np.array([0.2, 1, -1, 0, 2])
        combined = PARABOLA_LINEAR.hypothesis(w1 + w2, x, 1.0 + 2.5)
        separate = PARABOLA_LINEAR.hypothesis(w1, x, 1.0) + PARABOLA_LINEAR.hypothesis(w2, x, 2.5)
        assert combined == pytest.approx(separate)

    def test_logistic_range(self):
        for z in (-30.0, -1.0, 0.0, 1.0, 30.0):
            p = LOGISTIC.hypothesis([1.0], [z], 0.0)
            assert 0.0 < p < 1.0
        assert LOGISTIC.hypothesis([1.0], [0.0], 0.0) == 0.5

    def test_sigmoid_no_overflow(self):
        with np.errstate(over="raise", invalid="raise"):
            values = sigmoid(np.array([-1e6, -710.0, 0.0, 710.0, 1e6]))
        assert np.all(np.isfinite(values))
        assert np.all((values >= 0.0) & (values <= 1.0))
        assert values[0] < 1e-300
        assert values[-1] == 1.0

    def test_sigmoid_scalar(self):
        assert isinstance(sigmoid(0.0), float)


class TestCost:
    """Cost for linear and logistic models."""

    def test_simple_linear(self):
        assert SIMPLE_LINEAR.cost([[1], [2]], [1, 3], [2], 1) == 2.0

    def test_parabola(self):
        cost = PARABOLA_LINEAR.cost([[1, -1], [2, 2]], [1, 4], [2, -1, 3, -1, 1], 1)
        assert cost == 3.25

    def test_non_negative(self):
        rng = np.random.default_rng(0)
        X = rng.normal(size=(20, 2))
        y_lin = rng.normal(size=20)
        y_bin = (rng.random(20) > 0.5).astype(float)
        for _ in range(5):
            w = rng.normal(size=5)
            assert PARABOLA_LINEAR.cost(X, y_lin, w, rng.normal()) >= 0
            assert LOGISTIC.cost(X, y_bin, w[:2], rng.normal()) >= 0

    def test_logistic_saturated_predictions_stay_finite(self, binary_data):
        X, y = binary_data
        # Huge weights with the wrong sign push predictions to exactly 0 / 1.
        cost = LOGISTIC.cost(X, y, [-1e4], 0.0)
        assert np.isfinite(cost)
        assert cost == pytest.approx(-np.log(1e-15), rel=1e-4)

    def test_logistic_cost_at_zero_weights(self, binary_data):
        X, y = binary_data
        assert LOGISTIC.cost(X, y, [0.0], 0.0) == pytest.approx(np.log(2))

    def test_empty_dataset(self):
        with pytest.raises(InvalidDataset):
            SIMPLE_LINEAR.cost([], [], [1], 0)

    def test_rows_vs_targets_mismatch(self):
        with pytest.raises(DimensionMismatch):
            SIMPLE_LINEAR.cost([[1], [2]], [1], [1], 0)

    def test_ragged_rows(self):
        with pytest.raises(DimensionMismatch):
            SIMPLE_LINEAR.cost([[1], [2, 3]], [1, 2], [1], 0)


class TestGradient:
    """Averaged gradients and the descent direction."""

    def test_simple_linear_values(self):
        w_grad, b_grad = SIMPLE_LINEAR.gradient([[1], [2]], [1, 3], [2], 1)
        np.testing.assert_allclose(w_grad, [3.0])
        assert b_grad == pytest.approx(2.0)

    def test_shape_matches_weights(self):
        X = np.array([[1.0, 2.0], [0.5, -1.0], [2.0, 0.0]])
        w_grad, _ = PARABOLA_LINEAR.gradient(X, [1, 2, 3], np.ones(5), 0.0)
        assert w_grad.shape == (5,)

    def test_matches_finite_differences(self):
        X = np.array([[0.5, 1.0], [1.5, -0.5], [-1.0, 2.0]])
        y = np.array([1.0, -2.0, 0.5])
        w = np.array([0.3, -0.2, 0.1, 0.4, -0.5])
        b = 0.25
        w_grad, b_grad = PARABOLA_LINEAR.gradient(X, y, w, b)

        eps = 1e-6
        for k in range(len(w)):
            step = np.zeros_like(w)
            step[k] = eps
            numeric = (
                PARABOLA_LINEAR.cost(X, y, w + step, b) - PARABOLA_LINEAR.cost(X, y, w - step, b)
            ) / (2 * eps)
            assert w_grad[k] == pytest.approx(numeric, rel=1e-5, abs=1e-8)
        numeric_b = (PARABOLA_LINEAR.cost(X, y, w, b + eps) - PARABOLA_LINEAR.cost(X, y, w, b - eps)) / (2 * eps)
        assert b_grad == pytest.approx(numeric_b, rel=1e-5)

    def test_small_step_decreases_cost(self, line_data):
        X, y = line_data
        w, b = np.array([0.0]), 0.0
        before = SIMPLE_LINEAR.cost(X, y, w, b)
        w_grad, b_grad = SIMPLE_LINEAR.gradient(X, y, w, b)
        after = SIMPLE_LINEAR.cost(X, y, w - 0.01 * w_grad, b - 0.01 * b_grad)
        assert after <= before

    def test_logistic_step_decreases_cost(self, binary_data):
        X, y = binary_data
        w, b = np.array([0.0]), 0.0
        before = LOGISTIC.cost(X, y, w, b)
        w_grad, b_grad = LOGISTIC.gradient(X, y, w, b)
        after = LOGISTIC.cost(X, y, w - 0.1 * w_grad, b - 0.1 * b_grad)
        assert after < before


class TestR2AndDescription:
    """R² edge cases and formula strings."""

    def test_perfect_fit(self, line_data):
        X, y = line_data
        assert SIMPLE_LINEAR.r2(X, [2.0], 1.0, y) == pytest.approx(1.0)

    def test_worse_than_mean_is_negative(self, line_data):
        X, y = line_data
        assert SIMPLE_LINEAR.r2(X, [-5.0], 0.0, y) < 0

    def test_empty_input(self):
        with pytest.raises(EmptyInput):
            SIMPLE_LINEAR.r2([[1.0]], [1.0], 0.0, [])
        with pytest.raises(EmptyInput):
            SIMPLE_LINEAR.r2([[1.0]], [], 0.0, [1.0])

    def test_mismatch(self):
        with pytest.raises(DimensionMismatch):
            SIMPLE_LINEAR.r2([[1.0], [2.0]], [1.0], 0.0, [1.0])

    def test_zero_variance(self):
        with pytest.raises(ZeroVariance):
            SIMPLE_LINEAR.r2([[1.0], [2.0]], [1.0], 0.0, [3.0, 3.0])

    def test_description(self):
        assert SIMPLE_LINEAR.description(1) == "w1 * x1 + b"
        assert PARABOLA_LINEAR.description(1) == "w1 * x1 + w2 * x1^2 + b"
        assert PARABOLA_LINEAR.description(2) == (
            "w1 * x2 + w2 * x2^2 + w3 * x1 + w4 * x1 * x2 + w5 * x1^2 + b"
        )
        assert LOGISTIC.description(1) == "sigmoid(w1 * x1 + b)"

    def test_unknown_model(self):
        with pytest.raises(ValueError):
            get_model("quartic")
