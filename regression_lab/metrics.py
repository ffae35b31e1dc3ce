from __future__ import annotations

"""
Metric helpers: R² for linear fits and classification summaries for logistic ones.
"""

import numpy as np
from sklearn import metrics

from .errors import DimensionMismatch, EmptyInput, ZeroVariance


def r2_score(y_true, y_pred) -> float:
    """
    1 - SSR / SST. Can be negative when the fit is worse than the mean.
    """
    y_arr = np.asarray(y_true, dtype=float).reshape(-1)
    pred_arr = np.asarray(y_pred, dtype=float).reshape(-1)
    if len(y_arr) == 0:
        raise EmptyInput("no targets to score")
    if len(y_arr) != len(pred_arr):
        raise DimensionMismatch(
            f"{len(y_arr)} targets vs {len(pred_arr)} predictions"
        )

    ssr = float(np.sum((y_arr - pred_arr) ** 2))
    sst = float(np.sum((y_arr - y_arr.mean()) ** 2))
    if sst == 0:
        raise ZeroVariance("targets have zero variance; R² is undefined")
    return 1.0 - ssr / sst


def compute_classification_metrics(y_true, probs: np.ndarray, threshold: float = 0.5):
    """Compute standard binary metrics given probabilities and a threshold."""
    y_arr = np.asarray(y_true).astype(int)
    probs = np.asarray(probs, dtype=float)
    preds = (probs >= threshold).astype(int)
    precision, recall, f1, _ = metrics.precision_recall_fscore_support(
        y_arr, preds, average="binary", zero_division=0
    )
    try:
        roc_auc = metrics.roc_auc_score(y_arr, probs)
    except ValueError:
        roc_auc = float("nan")

    return {
        "accuracy": metrics.accuracy_score(y_arr, preds),
        "precision": precision,
        "recall": recall,
        "f1": f1,
        "roc_auc": roc_auc,
        "confusion_matrix": metrics.confusion_matrix(y_arr, preds, labels=[0, 1]),
    }
