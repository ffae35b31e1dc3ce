import sys
import os
from pathlib import Path

# Add parent directory to sys.path
sys.path.append(os.path.abspath(".."))

import matplotlib

matplotlib.use("Agg")

from regression_lab import RegressionTrainer, default_dataset, get_model
from regression_lab.plots import plot_cost_history, plot_fit

# Configuration
MODEL_KEYS = ["simple_linear", "parabola_linear", "cubic_linear"]
LEARNING_RATE = 0.01
LAMBDA = 0.01
PRECISION = 0.001
MAX_STEPS = 20000
OUTPUT_DIR = Path(".")


def train_and_record(dataset, model):
    """Run continuous training and keep every snapshot the stream delivers."""
    X, y = dataset.prepared(normalize_x=True)
    trainer = RegressionTrainer(
        X,
        y,
        model.default_weights(dataset.feature_count),
        0.0,
        learning_rate=LEARNING_RATE,
        lam=LAMBDA,
        precision_threshold=PRECISION,
        model=model,
        snapshot_interval=0.0,
    )
    steps, costs = [0], [trainer.cost]
    trainer.start_training(max_steps=MAX_STEPS)
    stream = trainer.state_updates()
    while True:
        running = trainer.is_training
        snapshot = stream.get(timeout=0.1)
        if snapshot is not None:
            steps.append(snapshot.step)
            costs.append(snapshot.cost)
        elif not running:
            break
    trainer.close()
    return trainer, steps, costs


def run_all():
    dataset = default_dataset()
    for key in MODEL_KEYS:
        model = get_model(key)
        print(f"Generating plots for {model.name}...")
        trainer, steps, costs = train_and_record(dataset, model)
        print(f"  {trainer.stop_reason} after {trainer.step} steps, cost {trainer.cost:.4f}, R² {trainer.r2():.4f}")

        plot_cost_history(steps, costs, OUTPUT_DIR / f"cost_{key}.png", title=f"Cost: {model.name}")
        plot_fit(
            dataset,
            model,
            trainer.weights,
            trainer.bias,
            OUTPUT_DIR / f"fit_{key}.png",
            normalized=True,
        )


if __name__ == "__main__":
    run_all()
