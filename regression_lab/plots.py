from __future__ import annotations

"""
Matplotlib renderings of a training run: cost curve and fitted curve over the data.
"""

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from .data_prep import Dataset
from .model import RegressionModel


def plot_cost_history(steps: Sequence[int], costs: Sequence[float], filename: Path | str, title: str = "Cost"):
    plt.figure(figsize=(8, 5))
    plt.plot(steps, costs, color="darkorange", lw=2)
    plt.xlabel("Step")
    plt.ylabel("Cost")
    plt.title(title)
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(filename)
    plt.close()


def plot_fit(
    dataset: Dataset,
    model: RegressionModel,
    weights,
    bias: float,
    filename: Path | str,
    feature_index: int = 0,
    normalized: bool = False,
    normalized_y: bool = False,
    points: int = 200,
):
    """
    Scatter one feature against the target and draw the model's curve.
    Other features are held at their mean.

    ``normalized`` and ``normalized_y`` pick the z-scored views of the
    features and the target; they must match what the weights were trained on.
    """
    X = dataset.x_norm if normalized else dataset.x
    y = dataset.y_norm if normalized_y else dataset.y
    grid = np.linspace(X[:, feature_index].min(), X[:, feature_index].max(), points)
    X_line = np.tile(X.mean(axis=0), (points, 1))
    X_line[:, feature_index] = grid
    y_line = model.predict(X_line, weights, bias)

    plt.figure(figsize=(8, 6))
    plt.scatter(X[:, feature_index], y, s=14, color="navy", alpha=0.7, label="data")
    plt.plot(grid, y_line, color="darkorange", lw=2, label=model.name)
    plt.xlabel(dataset.feature_names[feature_index])
    plt.ylabel(dataset.target_name)
    plt.title(dataset.name)
    plt.legend(loc="best")
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(filename)
    plt.close()
