from __future__ import annotations

"""
Dataset helpers: CSV loading, column selection, and normalised views for training.
"""

from functools import cached_property
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from .constants import DEFAULT_DATASET_NAME, FISH_LENGTHS, FISH_WEIGHTS
from .errors import DatasetLoadError
from .model import as_matrix
from .scaling import DataScaler, normalize_columns


class Dataset:
    """
    (X, y) pair plus lazily computed z-score views.

    The arrays are private copies marked read-only, so the cached views can
    never go stale. ``prepared`` hands out writable copies.
    """

    def __init__(self, name: str, x, y, feature_names=None, target_name: str = "y"):
        X_arr, y_arr = as_matrix(x, y)
        self._x = X_arr.copy()
        self._y = y_arr.copy()
        self._x.setflags(write=False)
        self._y.setflags(write=False)
        self.name = name
        self.feature_names = list(
            feature_names or [f"x{j + 1}" for j in range(X_arr.shape[1])]
        )
        self.target_name = target_name

    def __repr__(self):
        return f"Dataset(name={self.name!r}, samples={self.sample_count}, features={self.feature_count})"

    @property
    def x(self) -> np.ndarray:
        return self._x

    @property
    def y(self) -> np.ndarray:
        return self._y

    @property
    def sample_count(self) -> int:
        return self.x.shape[0]

    @property
    def feature_count(self) -> int:
        return self.x.shape[1]

    @cached_property
    def _x_scaled(self) -> tuple[np.ndarray, list[DataScaler]]:
        return normalize_columns(self.x)

    @property
    def x_norm(self) -> np.ndarray:
        return self._x_scaled[0]

    @property
    def x_scalers(self) -> list[DataScaler]:
        return self._x_scaled[1]

    @cached_property
    def y_scaler(self) -> DataScaler:
        scaler = DataScaler()
        scaler.normalize(self.y)
        return scaler

    @cached_property
    def y_norm(self) -> np.ndarray:
        return (self.y - self.y_scaler.mean_) / self.y_scaler.std_

    def prepared(self, normalize_x: bool = True, normalize_y: bool = False):
        """(X, y) as handed to the trainer."""
        X = self.x_norm if normalize_x else self.x
        y = self.y_norm if normalize_y else self.y
        return X.copy(), y.copy()


def load_table(source: Path | str) -> tuple[np.ndarray, list[str]]:
    """
    Read a CSV with a header row into a float matrix and its column names.
    Cells that are not numbers become 0.0.
    """
    path = Path(source)
    if not path.is_file():
        raise DatasetLoadError(f"CSV file not found: {path}")
    try:
        df = pd.read_csv(path)
    except pd.errors.EmptyDataError:
        raise DatasetLoadError(f"CSV file has no header row: {path}") from None
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as exc:
        raise DatasetLoadError(f"Could not parse CSV file {path}: {exc}") from exc

    if df.shape[1] == 0:
        raise DatasetLoadError(f"CSV file has no columns: {path}")
    if df.empty:
        raise DatasetLoadError(f"CSV file has no data rows: {path}")

    table = df.apply(pd.to_numeric, errors="coerce").fillna(0.0).astype(float)
    return table.to_numpy(), [str(c) for c in df.columns]


def select_columns(
    table,
    x_indexes: Sequence[int],
    y_index: int,
    name: str = "Loaded dataset",
    names: Sequence[str] | None = None,
) -> Dataset:
    """Build a Dataset from chosen feature columns and one target column."""
    table_arr = np.asarray(table, dtype=float)
    if table_arr.ndim != 2 or table_arr.shape[0] == 0:
        raise DatasetLoadError("table is empty")
    if not x_indexes:
        raise DatasetLoadError("select at least one feature column")
    column_count = table_arr.shape[1]
    for idx in [*x_indexes, y_index]:
        if not 0 <= idx < column_count:
            raise DatasetLoadError(
                f"column index {idx} out of range for a table with {column_count} columns"
            )
    return Dataset(
        name,
        table_arr[:, list(x_indexes)],
        table_arr[:, y_index],
        feature_names=[names[i] for i in x_indexes] if names else None,
        target_name=names[y_index] if names else "y",
    )


def load_dataset(
    source: Path | str, x_indexes: Sequence[int], y_index: int
) -> Dataset:
    table, names = load_table(source)
    return select_columns(table, x_indexes, y_index, name=Path(source).name, names=names)


def default_dataset() -> Dataset:
    """Fish length -> weight, one feature."""
    return Dataset(
        DEFAULT_DATASET_NAME,
        [[length] for length in FISH_LENGTHS],
        FISH_WEIGHTS,
        feature_names=["length"],
        target_name="weight",
    )
