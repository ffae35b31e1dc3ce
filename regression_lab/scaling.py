from __future__ import annotations

"""
Z-score normalisation for dataset columns.
"""

import numpy as np

from .errors import EmptyInput


class DataScaler:
    """
    Column scaler remembering the mean / std of the last call to normalize().
    Uses the population std; a constant column keeps std = 1 so it maps to 0.
    """

    def __init__(self):
        self.mean_: float | None = None
        self.std_: float | None = None

    def normalize(self, values) -> tuple[np.ndarray, float, float]:
        arr = np.asarray(values, dtype=float).reshape(-1)
        if len(arr) == 0:
            raise EmptyInput("cannot normalise an empty column")
        mean = float(arr.mean())
        std = float(arr.std())
        if std == 0:
            std = 1.0
        self.mean_, self.std_ = mean, std
        return (arr - mean) / std, mean, std

    def denormalize(self, values) -> np.ndarray:
        if self.mean_ is None or self.std_ is None:
            raise RuntimeError("Scaler is not fitted.")
        return np.asarray(values, dtype=float) * self.std_ + self.mean_


def normalize_columns(X) -> tuple[np.ndarray, list[DataScaler]]:
    """Scale every column of X independently."""
    X_arr = np.asarray(X, dtype=float)
    scalers = [DataScaler() for _ in range(X_arr.shape[1])]
    columns = [scaler.normalize(X_arr[:, j])[0] for j, scaler in enumerate(scalers)]
    return np.column_stack(columns), scalers
