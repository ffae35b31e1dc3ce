from __future__ import annotations

"""
Error types raised by the model math, the data helpers, and the trainer.
"""


class CalculationError(ValueError):
    """Base class for failures in the regression math."""


class InvalidDimensions(CalculationError):
    """Feature count or polynomial degree is not a positive integer."""


class DimensionMismatch(CalculationError):
    """Weights vs. terms, or X rows vs. y length, disagree."""


class EmptyInput(CalculationError):
    pass


class ZeroVariance(CalculationError):
    """Targets are constant, so R² is undefined."""


class InvalidDataset(CalculationError):
    """Dataset has no samples."""


class DatasetLoadError(ValueError):
    """CSV source is missing, unreadable, or malformed."""


class TrainingActiveError(RuntimeError):
    """A command that needs exclusive access was issued while the loop runs."""
