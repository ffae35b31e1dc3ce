from __future__ import annotations

"""
Polynomial linear / logistic regression models.

The math here is pure: every function takes (weights, bias, data) and
returns a value. Regularisation is the trainer's job.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from .constants import LOG_EPSILON
from .errors import DimensionMismatch, EmptyInput, InvalidDataset, InvalidDimensions
from .metrics import r2_score
from .terms import Term, polynomial_terms, term_label, term_matrix


class RegressionType(str, Enum):
    LINEAR = "linear"
    LOGISTIC = "logistic"


def sigmoid(z):
    """Overflow-free logistic function (branches on the sign of z)."""
    z_arr = np.asarray(z, dtype=float)
    flat = np.atleast_1d(z_arr)
    out = np.empty_like(flat)
    pos = flat >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-flat[pos]))
    exp_z = np.exp(flat[~pos])
    out[~pos] = exp_z / (1.0 + exp_z)
    if z_arr.ndim == 0:
        return float(out[0])
    return out


def evaluate(regression_type: RegressionType, z):
    """Map the raw polynomial value to a prediction for the given model type."""
    if regression_type is RegressionType.LOGISTIC:
        return sigmoid(z)
    return z


def as_matrix(X, y=None) -> tuple[np.ndarray, np.ndarray | None]:
    """Validate and convert X (and optionally y) to float arrays."""
    if hasattr(X, "to_numpy"):
        X = X.to_numpy()
    if len(X) == 0:
        raise InvalidDataset("dataset has no samples")
    if not isinstance(X, np.ndarray):
        widths = {len(row) for row in X}
        if len(widths) != 1:
            raise DimensionMismatch(f"rows have differing column counts: {sorted(widths)}")
    X_arr = np.asarray(X, dtype=float)
    if X_arr.ndim != 2:
        raise DimensionMismatch(f"feature matrix must be 2-D, got shape {X_arr.shape}")
    if X_arr.shape[1] == 0:
        raise InvalidDimensions("feature matrix has no columns")

    if y is None:
        return X_arr, None
    y_arr = np.asarray(y, dtype=float).reshape(-1)
    if len(y_arr) != len(X_arr):
        raise DimensionMismatch(
            f"X has {len(X_arr)} rows but y has {len(y_arr)} values"
        )
    return X_arr, y_arr


@dataclass(frozen=True)
class RegressionModel:
    """A named polynomial model of a fixed degree and type."""

    name: str
    regression_type: RegressionType
    polynomial_degree: int

    def terms(self, feature_count: int) -> tuple[Term, ...]:
        return polynomial_terms(feature_count, self.polynomial_degree)

    def weights_count(self, feature_count: int) -> int:
        return len(self.terms(feature_count))

    def default_weights(self, feature_count: int) -> np.ndarray:
        return np.zeros(self.weights_count(feature_count))

    def _checked_weights(self, weights, terms) -> np.ndarray:
        w = np.asarray(weights, dtype=float).reshape(-1)
        if len(w) != len(terms):
            raise DimensionMismatch(
                f"weights count ({len(w)}) must match the number of "
                f"polynomial terms ({len(terms)})"
            )
        return w

    def hypothesis(self, weights, x, bias: float) -> float:
        """Prediction for a single feature vector."""
        x_arr = np.asarray(x, dtype=float).reshape(1, -1)
        return float(self.predict(x_arr, weights, bias)[0])

    def predict(self, X, weights, bias: float) -> np.ndarray:
        """Vectorised hypothesis over every row of X."""
        X_arr, _ = as_matrix(X)
        terms = self.terms(X_arr.shape[1])
        w = self._checked_weights(weights, terms)
        z = term_matrix(X_arr, terms) @ w + bias
        return np.asarray(evaluate(self.regression_type, z), dtype=float)

    def cost(self, X, y, weights, bias: float) -> float:
        """
        Mean squared error / 2 for linear models, mean binary cross-entropy
        for logistic ones (predictions clipped away from 0 and 1).
        """
        X_arr, y_arr = as_matrix(X, y)
        preds = self.predict(X_arr, weights, bias)
        if self.regression_type is RegressionType.LOGISTIC:
            clipped = np.clip(preds, LOG_EPSILON, 1.0 - LOG_EPSILON)
            losses = -(y_arr * np.log(clipped) + (1 - y_arr) * np.log(1 - clipped))
            return float(np.mean(losses))
        return float(np.mean((y_arr - preds) ** 2) / 2.0)

    def gradient(self, X, y, weights, bias: float) -> tuple[np.ndarray, float]:
        """Averaged gradient of the unregularised cost w.r.t. weights and bias."""
        X_arr, y_arr = as_matrix(X, y)
        terms = self.terms(X_arr.shape[1])
        w = self._checked_weights(weights, terms)
        values = term_matrix(X_arr, terms)
        preds = evaluate(self.regression_type, values @ w + bias)
        error = np.asarray(preds, dtype=float) - y_arr
        m = len(y_arr)
        return (values.T @ error) / m, float(np.sum(error) / m)

    def description(self, feature_count: int) -> str:
        """Formula such as ``w1 * x1 + w2 * x1^2 + b``."""
        parts = [
            f"w{index + 1} * {term_label(term)}"
            for index, term in enumerate(self.terms(feature_count))
        ]
        formula = " + ".join(parts) + " + b"
        if self.regression_type is RegressionType.LOGISTIC:
            return f"sigmoid({formula})"
        return formula

    def r2(self, X, weights, bias: float, y) -> float:
        """Coefficient of determination of the model's predictions on (X, y)."""
        if len(y) == 0 or len(weights) == 0 or len(X) == 0:
            raise EmptyInput("X, y and weights must all be non-empty")
        if len(y) != len(X):
            raise DimensionMismatch(f"X has {len(X)} rows but y has {len(y)} values")
        return r2_score(y, self.predict(X, weights, bias))


SIMPLE_LINEAR = RegressionModel("Simple Linear Regression", RegressionType.LINEAR, 1)
PARABOLA_LINEAR = RegressionModel("Parabolic Linear Regression", RegressionType.LINEAR, 2)
CUBIC_LINEAR = RegressionModel("Cubic Linear Regression", RegressionType.LINEAR, 3)
COMPLEX_LINEAR = RegressionModel("x^6 Linear Regression", RegressionType.LINEAR, 6)
LOGISTIC = RegressionModel("Logistic Regression", RegressionType.LOGISTIC, 1)

MODELS = {
    "simple_linear": SIMPLE_LINEAR,
    "parabola_linear": PARABOLA_LINEAR,
    "cubic_linear": CUBIC_LINEAR,
    "complex_linear": COMPLEX_LINEAR,
    "logistic": LOGISTIC,
}


def get_model(key: str) -> RegressionModel:
    try:
        return MODELS[key]
    except KeyError:
        raise ValueError(f"Unknown model: {key}") from None
