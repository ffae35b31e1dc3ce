"""
Interactive polynomial linear / logistic regression trained by batch gradient descent.

This package contains the polynomial term generator, the regression model math,
a background trainer that streams throttled progress snapshots, and dataset helpers
used by main.py.
"""

from .data_prep import Dataset, default_dataset, load_dataset, load_table, select_columns
from .errors import (
    CalculationError,
    DatasetLoadError,
    DimensionMismatch,
    EmptyInput,
    InvalidDataset,
    InvalidDimensions,
    TrainingActiveError,
    ZeroVariance,
)
from .metrics import compute_classification_metrics, r2_score
from .model import MODELS, RegressionModel, RegressionType, get_model
from .scaling import DataScaler
from .snapshots import Snapshot, SnapshotStream
from .terms import polynomial_terms
from .trainer import RegressionTrainer

__all__ = [
    "Dataset",
    "default_dataset",
    "load_dataset",
    "load_table",
    "select_columns",
    "CalculationError",
    "DatasetLoadError",
    "DimensionMismatch",
    "EmptyInput",
    "InvalidDataset",
    "InvalidDimensions",
    "TrainingActiveError",
    "ZeroVariance",
    "compute_classification_metrics",
    "r2_score",
    "MODELS",
    "RegressionModel",
    "RegressionType",
    "get_model",
    "DataScaler",
    "Snapshot",
    "SnapshotStream",
    "polynomial_terms",
    "RegressionTrainer",
]
