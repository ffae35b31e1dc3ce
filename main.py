from __future__ import annotations

"""
CLI entrypoint: fit a polynomial linear or logistic regression by batch gradient
descent on a CSV file (or the built-in fish dataset) and watch it converge.
"""

import argparse
from pathlib import Path

import numpy as np

from regression_lab import (
    MODELS,
    RegressionTrainer,
    RegressionType,
    ZeroVariance,
    compute_classification_metrics,
    default_dataset,
    get_model,
    load_dataset,
)
from regression_lab.constants import (
    DEFAULT_LAMBDA,
    DEFAULT_LEARNING_RATE,
    DEFAULT_PRECISION_THRESHOLD,
    SNAPSHOT_INTERVAL,
)


def describe_dataset(dataset):
    """Print a short summary of dataset size and columns."""
    print(f"Dataset: {dataset.name} ({dataset.sample_count} samples)")
    print(f"Features: {dataset.feature_names} -> target: {dataset.target_name}")


def print_metrics(label: str, metrics: dict):
    """Nicely format the metric dict produced by compute_classification_metrics."""
    cm = metrics["confusion_matrix"]
    print(
        f"[{label}] Acc {metrics['accuracy']:.3f} | "
        f"Prec {metrics['precision']:.3f} | Rec {metrics['recall']:.3f} | "
        f"F1 {metrics['f1']:.3f} | ROC-AUC {metrics['roc_auc']:.3f}"
    )
    print(f"    Confusion matrix [[TN, FP], [FN, TP]]: {cm.tolist()}")


def parse_indexes(value: str) -> list[int]:
    return [int(v.strip()) for v in value.split(",") if v.strip()]


def build_arg_parser():
    """CLI parser with knobs for the dataset, model, and hyperparameters."""
    parser = argparse.ArgumentParser(
        description="Fit a polynomial regression with batch gradient descent."
    )
    parser.add_argument("--csv-path", type=Path, default=None, help="CSV with a header row.")
    parser.add_argument(
        "--x-columns",
        type=parse_indexes,
        default=[0],
        help="Comma-separated feature column indexes (CSV only).",
    )
    parser.add_argument("--y-column", type=int, default=1, help="Target column index (CSV only).")
    parser.add_argument("--model", choices=sorted(MODELS), default="simple_linear")
    parser.add_argument("--lr", type=float, default=DEFAULT_LEARNING_RATE, help="Learning rate.")
    parser.add_argument("--l2", type=float, default=DEFAULT_LAMBDA, help="L2 regularization.")
    parser.add_argument(
        "--precision",
        type=float,
        default=DEFAULT_PRECISION_THRESHOLD,
        help="Stop once the cost improves by less than this percentage per step.",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="Hard cap on steps.")
    parser.add_argument(
        "--normalize",
        action="store_true",
        help="Z-score the feature columns before training.",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=0.5,
        help=f"Seconds between progress lines (trainer throttle: {SNAPSHOT_INTERVAL}s).",
    )
    parser.add_argument("--verbose", action="store_true", help="Per-500-step loss lines.")
    return parser


def watch(trainer: RegressionTrainer, interval: float):
    """Print throttled progress until the loop publishes its final snapshot."""
    stream = trainer.state_updates()
    stream.interval = interval
    while True:
        running = trainer.is_training
        snapshot = stream.get(timeout=interval)
        if snapshot is not None:
            print(f"step={snapshot.step:>7} cost={snapshot.cost:.6f} b={snapshot.bias:.4f}")
        elif not running:
            break


def main(args: argparse.Namespace | None = None):
    """Load data, train until convergence, and report the fit."""
    args = args or build_arg_parser().parse_args()

    if args.csv_path is not None:
        dataset = load_dataset(args.csv_path, args.x_columns, args.y_column)
    else:
        dataset = default_dataset()
    describe_dataset(dataset)

    model = get_model(args.model)
    X, y = dataset.prepared(normalize_x=args.normalize)
    print(f"Model: {model.name}: y = {model.description(dataset.feature_count)}")

    trainer = RegressionTrainer(
        X,
        y,
        model.default_weights(dataset.feature_count),
        0.0,
        learning_rate=args.lr,
        lam=args.l2,
        precision_threshold=args.precision,
        model=model,
        verbose=args.verbose,
    )
    print(f"Initial cost: {trainer.cost:.6f}")

    trainer.start_training(max_steps=args.max_steps)
    try:
        watch(trainer, args.interval)
    except KeyboardInterrupt:
        print("Interrupted, stopping training...")
        trainer.stop_training()
    finally:
        trainer.close()

    print(f"\nStopped ({trainer.stop_reason}) after {trainer.step} steps, cost {trainer.cost:.6f}")
    if trainer.last_error is not None:
        print(f"Training error: {trainer.last_error}")
    print(f"Weights: {np.round(trainer.weights, 6).tolist()}")
    print(f"Bias: {trainer.bias:.6f}")

    if model.regression_type is RegressionType.LOGISTIC:
        probs = model.predict(X, trainer.weights, trainer.bias)
        print_metrics(model.name, compute_classification_metrics(y, probs))
    else:
        try:
            print(f"R²: {trainer.r2():.4f}")
        except ZeroVariance as exc:
            print(f"R² unavailable: {exc}")


if __name__ == "__main__":
    main()
