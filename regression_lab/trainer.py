from __future__ import annotations

"""
Stateful batch gradient descent trainer with a cancellable background loop.

All training state (weights, bias, step, cost) lives behind one lock. The
continuous loop runs in a worker thread and takes the lock once per
iteration; manual steps are refused while the loop is active so the two can
never interleave.
"""

import threading
import time

import numpy as np

from .constants import (
    DEFAULT_LAMBDA,
    DEFAULT_LEARNING_RATE,
    DEFAULT_PRECISION_THRESHOLD,
    SNAPSHOT_INTERVAL,
)
from .errors import CalculationError, TrainingActiveError
from .model import SIMPLE_LINEAR, RegressionModel, as_matrix
from .snapshots import Snapshot, SnapshotStream


def _check_hyperparameters(learning_rate=None, lam=None, precision_threshold=None):
    if learning_rate is not None and not learning_rate > 0:
        raise ValueError(f"learning rate must be > 0, got {learning_rate}")
    if lam is not None and not lam >= 0:
        raise ValueError(f"regularization must be >= 0, got {lam}")
    if precision_threshold is not None and not precision_threshold >= 0:
        raise ValueError(f"precision threshold must be >= 0, got {precision_threshold}")


class RegressionTrainer:
    """
    Owns (weights, bias, step, cost) for one model on one dataset.

    Hyperparameter updates take effect from the next iteration. Changing the
    model or the dataset stops any running loop and rebuilds the state from
    zero.
    """

    def __init__(
        self,
        x,
        y,
        weights,
        bias: float = 0.0,
        learning_rate: float = DEFAULT_LEARNING_RATE,
        lam: float = DEFAULT_LAMBDA,
        precision_threshold: float = DEFAULT_PRECISION_THRESHOLD,
        model: RegressionModel = SIMPLE_LINEAR,
        snapshot_interval: float = SNAPSHOT_INTERVAL,
        verbose: bool = False,
        log_every: int = 500,
    ):
        _check_hyperparameters(learning_rate, lam, precision_threshold)
        self._lock = threading.RLock()
        self._x, self._y = as_matrix(x, y)
        self._model = model
        self._w = np.asarray(weights, dtype=float).reshape(-1).copy()
        self._b = float(bias)
        self._step = 0
        self._previous_cost = 0.0
        self._learning_rate = learning_rate
        self._lambda = lam
        self._precision_threshold = precision_threshold
        self.verbose = verbose
        self.log_every = log_every

        self._stream = SnapshotStream(snapshot_interval)
        self._cancel = threading.Event()
        self._worker: threading.Thread | None = None
        self._training = False
        self.last_error: Exception | None = None
        self.stop_reason: str | None = None

        self._cost = self._compute_cost(self._w, self._b)

    # -- queries -----------------------------------------------------------

    @property
    def weights(self) -> tuple[float, ...]:
        with self._lock:
            return tuple(float(v) for v in self._w)

    @property
    def bias(self) -> float:
        return self._b

    @property
    def step(self) -> int:
        return self._step

    @property
    def cost(self) -> float:
        return self._cost

    @property
    def previous_cost(self) -> float:
        return self._previous_cost

    @property
    def is_training(self) -> bool:
        return self._training

    @property
    def model(self) -> RegressionModel:
        return self._model

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @property
    def regularization(self) -> float:
        return self._lambda

    @property
    def precision_threshold(self) -> float:
        return self._precision_threshold

    @property
    def feature_count(self) -> int:
        return self._x.shape[1]

    def state(self) -> Snapshot:
        with self._lock:
            return self._snapshot()

    def state_updates(self) -> SnapshotStream:
        return self._stream

    def r2(self) -> float:
        with self._lock:
            return self._model.r2(self._x, self._w, self._b, self._y)

    # -- internals ---------------------------------------------------------

    def _snapshot(self) -> Snapshot:
        return Snapshot(tuple(float(v) for v in self._w), self._b, self._step, self._cost)

    def _compute_cost(self, w: np.ndarray, b: float, lam: float | None = None) -> float:
        m = len(self._y)
        if lam is None:
            lam = self._lambda
        penalty = lam * float(np.sum(w ** 2)) / 2 / m
        return self._model.cost(self._x, self._y, w, b) + penalty

    def _advance(self) -> Snapshot:
        """One gradient descent iteration. Commits nothing if any part fails."""
        m = len(self._y)
        lr, lam = self._learning_rate, self._lambda
        w_grad, b_grad = self._model.gradient(self._x, self._y, self._w, self._b)
        new_w = self._w - lr * (w_grad + lam * self._w / m)
        new_b = self._b - lr * b_grad
        new_cost = self._compute_cost(new_w, new_b, lam)

        self._previous_cost = self._cost
        self._w, self._b, self._cost = new_w, float(new_b), new_cost
        self._step += 1

        if self.verbose and self.log_every and self._step % self.log_every == 0:
            print(f"[GD] step={self._step}, loss={self._cost:.4f}")
        return self._snapshot()

    def _has_converged(self, first_iteration: bool) -> bool:
        if first_iteration:
            return False
        if self._previous_cost == 0:
            # Already at zero cost on the previous step; nothing left to improve.
            return True
        delta_percent = (self._previous_cost - self._cost) / self._previous_cost * 100
        return delta_percent <= self._precision_threshold

    def _reset_locked(self):
        if self._training:
            raise TrainingActiveError("training restarted while the trainer was being reset")
        self._w = self._model.default_weights(self.feature_count)
        self._b = 0.0
        self._step = 0
        self._previous_cost = 0.0
        self._cost = self._compute_cost(self._w, self._b)
        self._stream.publish(self._snapshot(), flush=True)

    def _train_loop(self, max_steps: int | None):
        reason = "cancelled"
        steps_run = 0
        try:
            while not self._cancel.is_set():
                with self._lock:
                    if self._cancel.is_set():
                        break
                    snapshot = self._advance()
                    converged = self._has_converged(steps_run == 0)
                steps_run += 1
                if converged:
                    reason = "converged"
                    break
                if max_steps is not None and steps_run >= max_steps:
                    reason = "max_steps"
                    break
                self._stream.publish(snapshot)
                time.sleep(0)
        except CalculationError as exc:
            self.last_error = exc
            reason = "failed"
        finally:
            with self._lock:
                self.stop_reason = reason
                self._stream.publish(self._snapshot(), final=True)
                self._training = False
            if self.verbose:
                print(
                    f"[GD] training {reason} at step={self._step}, loss={self._cost:.4f}"
                    + (f" ({self.last_error})" if self.last_error else "")
                )

    # -- commands ----------------------------------------------------------

    def run_one_step(self) -> Snapshot:
        """Single gradient descent iteration; refused while the loop is running."""
        with self._lock:
            if self._training:
                raise TrainingActiveError("cannot step manually while training is running")
            snapshot = self._advance()
            self._stream.publish(snapshot, flush=True)
        return snapshot

    def start_training(self, max_steps: int | None = None):
        """
        Run iterations in a background thread until the relative cost change
        drops to the precision threshold, ``stop_training`` is called, or
        ``max_steps`` iterations have run. No-op if already training.
        """
        with self._lock:
            if self._training:
                return
            self._cancel.clear()
            self._training = True
            self.last_error = None
            self.stop_reason = None
            self._worker = threading.Thread(
                target=self._train_loop,
                args=(max_steps,),
                name="regression-trainer",
                daemon=True,
            )
            self._worker.start()

    def stop_training(self, wait: bool = True, timeout: float | None = None):
        """Ask the loop to finish its current iteration and stop. Safe to repeat."""
        self._cancel.set()
        worker = self._worker
        if wait and worker is not None and worker is not threading.current_thread():
            worker.join(timeout)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the loop ends; True if it is no longer running."""
        worker = self._worker
        if worker is not None:
            worker.join(timeout)
        return not self._training

    def reset_training(self):
        self.stop_training()
        with self._lock:
            self._reset_locked()

    def update_model(self, model: RegressionModel):
        self.stop_training()
        with self._lock:
            self._model = model
            self._reset_locked()

    def update_dataset(self, x, y):
        X_arr, y_arr = as_matrix(x, y)
        self.stop_training()
        with self._lock:
            self._x, self._y = X_arr.copy(), y_arr.copy()
            self._reset_locked()

    def set_weights(self, weights, bias: float | None = None):
        """
        Manual parameter edit. A wrong-length vector is accepted here and
        rejected by the next step; until then the cost reads as NaN.
        """
        with self._lock:
            if self._training:
                raise TrainingActiveError("cannot edit parameters while training is running")
            self._w = np.asarray(weights, dtype=float).reshape(-1).copy()
            if bias is not None:
                self._b = float(bias)
            if len(self._w) == self._model.weights_count(self.feature_count):
                self._cost = self._compute_cost(self._w, self._b)
            else:
                self._cost = float("nan")

    def update_learning_rate(self, value: float):
        _check_hyperparameters(learning_rate=value)
        with self._lock:
            self._learning_rate = value

    def update_regularization(self, value: float):
        _check_hyperparameters(lam=value)
        with self._lock:
            self._lambda = value

    def update_precision_threshold(self, value: float):
        _check_hyperparameters(precision_threshold=value)
        with self._lock:
            self._precision_threshold = value

    def close(self):
        self.stop_training()
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
