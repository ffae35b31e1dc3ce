from __future__ import annotations

"""
Training progress snapshots and a throttled "latest value" stream for observers.
"""

import threading
import time
from collections import deque
from typing import Iterator, NamedTuple

from .constants import SNAPSHOT_INTERVAL


class Snapshot(NamedTuple):
    weights: tuple[float, ...]
    bias: float
    step: int
    cost: float


class SnapshotStream:
    """
    Latest-value channel between the training worker and one observer.

    ``publish`` overwrites the slot, so a slow reader only ever sees the newest
    intermediate snapshot, at most one per ``interval`` seconds. A snapshot
    published with ``flush=True`` (a manual step, a reset) skips the throttle
    but can still be overwritten. A snapshot published with ``final=True`` ends
    a training run: it is queued rather than overwritten, and every queued
    final snapshot is handed over, oldest first, before the slot is looked at.
    """

    def __init__(self, interval: float = SNAPSHOT_INTERVAL):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.interval = interval
        self._cond = threading.Condition()
        self._finals: deque[Snapshot] = deque()
        self._pending: Snapshot | None = None
        self._pending_flush = False
        self._latest: Snapshot | None = None
        self._last_delivery: float | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, snapshot: Snapshot, final: bool = False, flush: bool = False):
        with self._cond:
            if self._closed:
                return
            if final:
                # Anything still in the slot predates this one.
                self._finals.append(snapshot)
                self._pending = None
                self._pending_flush = False
            else:
                self._pending = snapshot
                self._pending_flush = self._pending_flush or flush
            self._latest = snapshot
            self._cond.notify_all()

    def latest(self) -> Snapshot | None:
        """Newest published snapshot, without consuming it."""
        with self._cond:
            return self._latest

    def close(self):
        """No more publishes; readers drain what is pending and then stop."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def _take(self) -> Snapshot:
        if self._finals:
            snapshot = self._finals.popleft()
        else:
            snapshot = self._pending
            self._pending = None
            self._pending_flush = False
        self._last_delivery = time.monotonic()
        return snapshot

    def get(self, timeout: float | None = None) -> Snapshot | None:
        """
        Next snapshot for the reader, or None if the timeout expires or the
        stream is closed and drained.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while True:
                now = time.monotonic()
                wait_for = None
                if self._finals:
                    return self._take()
                if self._pending is not None:
                    if self._pending_flush or self._last_delivery is None:
                        return self._take()
                    ready_at = self._last_delivery + self.interval
                    if now >= ready_at:
                        return self._take()
                    wait_for = ready_at - now
                elif self._closed:
                    return None

                if deadline is not None:
                    remaining = deadline - now
                    if remaining <= 0:
                        return None
                    wait_for = remaining if wait_for is None else min(wait_for, remaining)
                self._cond.wait(wait_for)

    def __iter__(self) -> Iterator[Snapshot]:
        while True:
            snapshot = self.get()
            if snapshot is None:
                return
            yield snapshot
