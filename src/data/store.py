"""
src/data/store.py
─────────────────
In-memory fleet state owned by the telemetry engine.

Provides:
  - get_live_machines()      : Current machine records (with live samples)
  - get_anomalies()          : Current ledger contents, newest-first
  - snapshot()               : Both of the above as one consistent FleetSnapshot
  - commit()                 : Apply one tick's samples + anomaly batch, then publish
  - set_operational_state()  : Operator/supervisor state changes
  - subscribe()              : Per-subscriber queue of every committed snapshot

Thread safety: one RLock guards machines, ledger and subscriber list.
Subscribers are notified after the lock is released.
Readers only ever receive frozen models.
"""
from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import datetime

import pandas as pd

from config.alerts import LEDGER_CAP
from src.data.ledger import AnomalyLedger
from src.data.models import (
    AnomalyRecord,
    FleetSnapshot,
    LiveSample,
    Machine,
    OperationalState,
)

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[FleetSnapshot], None]


class Subscription:
    """Receives every snapshot committed after it was opened."""

    def __init__(self, store: FleetStore, callback: SnapshotCallback | None = None):
        self._store = store
        self._queue: queue.SimpleQueue[FleetSnapshot] = queue.SimpleQueue()
        self.callback = callback
        self.active = True

    def _deliver(self, snapshot: FleetSnapshot) -> None:
        self._queue.put(snapshot)
        if self.callback is not None:
            try:
                self.callback(snapshot)
            except Exception:
                logger.exception("Snapshot subscriber callback failed (tick %d)", snapshot.tick)

    def get(self, timeout: float | None = None) -> FleetSnapshot | None:
        """Next pending snapshot, or None if none arrives within `timeout`."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[FleetSnapshot]:
        """All pending snapshots, oldest first."""
        pending: list[FleetSnapshot] = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending

    def close(self) -> None:
        if self.active:
            self._store._unsubscribe(self)
            self.active = False


class FleetStore:
    def __init__(self, machines: Iterable[Machine], ledger_cap: int = LEDGER_CAP):
        self._lock = threading.RLock()
        self._machines: dict[str, Machine] = {m.id: m for m in machines}
        self._ledger = AnomalyLedger(cap=ledger_cap)
        self._subscribers: list[Subscription] = []
        self._tick = 0
        self._last_tick_at: datetime | None = None

    # ── Readers ───────────────────────────────────────────────────────────────

    def get_live_machines(self) -> list[Machine]:
        with self._lock:
            return list(self._machines.values())

    def get_anomalies(self) -> list[AnomalyRecord]:
        with self._lock:
            return list(self._ledger.snapshot())

    def get_machine(self, machine_id: str) -> Machine:
        with self._lock:
            return self._machines[machine_id]

    def snapshot(self) -> FleetSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def anomalies_frame(self) -> pd.DataFrame:
        """Ledger as a pandas DataFrame, newest-first."""
        with self._lock:
            return self._ledger.to_dataframe()

    @property
    def ticks(self) -> int:
        return self._tick

    @property
    def ledger_cap(self) -> int:
        return self._ledger.cap

    def __len__(self) -> int:
        return len(self._machines)

    # ── Writers ───────────────────────────────────────────────────────────────

    def commit(
        self,
        samples: Mapping[str, LiveSample],
        batch: Sequence[AnomalyRecord],
        timestamp: datetime,
    ) -> FleetSnapshot:
        """
        Apply one tick atomically: write samples, merge the batch once,
        advance the tick counter and publish to subscribers.

        Samples are applied onto the current records. A machine that left
        Running while the tick was in flight keeps its frozen sample, and
        its records from this tick are discarded.
        """
        with self._lock:
            stopped: set[str] = set()
            for machine_id, sample in samples.items():
                current = self._machines.get(machine_id)
                if current is None:
                    logger.warning("Dropping sample for unknown machine %s", machine_id)
                    continue
                if not current.is_running:
                    logger.info("Dropping sample for %s: now %s", machine_id, current.operational_state.value)
                    stopped.add(machine_id)
                    continue
                self._machines[machine_id] = current.model_copy(update={"live_sample": sample})
            if stopped:
                batch = [r for r in batch if r.machine_id not in stopped]
            self._ledger.merge(batch)
            self._tick += 1
            self._last_tick_at = timestamp

            snap = self._snapshot_locked()
            subscribers = list(self._subscribers)

        # Delivered outside the lock so a slow callback cannot stall readers
        for subscription in subscribers:
            subscription._deliver(snap)
        return snap

    def set_operational_state(self, machine_id: str, state: OperationalState | str) -> Machine:
        state = OperationalState(state)
        with self._lock:
            current = self._machines[machine_id]
            if current.operational_state != state:
                logger.info("Machine %s: %s → %s", machine_id, current.operational_state.value, state.value)
            updated = current.model_copy(update={"operational_state": state})
            self._machines[machine_id] = updated
            return updated

    # ── Subscriptions ─────────────────────────────────────────────────────────

    def subscribe(self, callback: SnapshotCallback | None = None) -> Subscription:
        subscription = Subscription(self, callback)
        with self._lock:
            self._subscribers.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)

    def _snapshot_locked(self) -> FleetSnapshot:
        return FleetSnapshot(
            tick=self._tick,
            timestamp=self._last_tick_at,
            machines=tuple(self._machines.values()),
            anomalies=self._ledger.snapshot(),
        )
