"""
src/engine/scheduler.py
───────────────────────
Periodic driver for the live telemetry engine.

One tick:
  1. Mutate every Running machine (others keep their sample)
  2. Classify every mutated sample into anomaly records
  3. Commit all samples + one combined anomaly batch to the store

All machines are mutated before any is classified, and the ledger is
merged once per tick, so records from one tick keep fleet order.
Ticks never overlap: a single daemon thread runs them back to back.
"""
from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime

from src.analytics.thresholds import classify
from src.data.models import AnomalyRecord, FleetSnapshot, LiveSample, Machine
from src.data.simulator import NoiseSource, mutate_sample
from src.data.store import FleetStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 3_000


class ConfigurationError(RuntimeError):
    """Raised when the scheduler cannot start with the given setup."""


class TelemetryScheduler:
    def __init__(
        self,
        store: FleetStore,
        noise: NoiseSource | None = None,
        interval_ms: int = DEFAULT_INTERVAL_MS,
    ):
        self.store = store
        self.noise = noise if noise is not None else NoiseSource()
        self.interval_ms = interval_ms
        self._stop_event = threading.Event()
        self._tick_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def ticks(self) -> int:
        return self.store.ticks

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        if self.is_running:
            if self._stop_event.is_set():
                raise RuntimeError("previous telemetry loop is still finishing a tick; retry after it exits")
            return
        if len(self.store) == 0:
            raise ConfigurationError("cannot start telemetry: machine catalog is empty")
        if self.interval_ms <= 0:
            raise ConfigurationError(f"tick interval must be positive, got {self.interval_ms} ms")

        # Fresh event per loop so a lingering old loop can never be revived
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="FoundryTelemetryLoop",
            daemon=True,
        )
        self._thread.start()
        logger.info("Telemetry scheduler started: %d machines, every %d ms", len(self.store), self.interval_ms)

    def stop(self, timeout: float | None = None) -> None:
        """
        Stop scheduling; an in-flight tick is allowed to finish.

        If the loop is still inside a tick when `timeout` expires it stays
        tracked, so `is_running` remains true until it exits.
        """
        self._stop_event.set()
        if self._thread is not None and self._thread.is_alive():
            self._thread.join(timeout=timeout)
        if self._thread is not None and self._thread.is_alive():
            logger.warning("Telemetry loop still finishing a tick after %.2f s", timeout)
            return
        self._thread = None
        logger.info("Telemetry scheduler stopped after %d ticks", self.ticks)

    def _run(self, stop_event: threading.Event) -> None:
        interval = self.interval_ms / 1000.0
        while not stop_event.wait(interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Telemetry tick failed")

    # ── Tick ──────────────────────────────────────────────────────────────────

    def _mutate(self, machines: list[Machine]) -> dict[str, LiveSample]:
        samples: dict[str, LiveSample] = {}
        for machine in machines:
            if not machine.is_running:
                continue
            try:
                samples[machine.id] = mutate_sample(machine.envelope, machine.live_sample, self.noise)
            except Exception:
                logger.exception("Skipping %s this tick: mutation failed", machine.id)
        return samples

    def _classify(
        self,
        machines: list[Machine],
        samples: dict[str, LiveSample],
        now: datetime,
    ) -> list[AnomalyRecord]:
        batch: list[AnomalyRecord] = []
        for machine in machines:
            sample = samples.get(machine.id)
            if sample is None:
                continue
            try:
                batch.extend(classify(machine, sample, now))
            except Exception:
                logger.exception("No anomalies recorded for %s this tick: classification failed", machine.id)
        return batch

    def tick(self, now: datetime | None = None) -> FleetSnapshot:
        """Run one full mutate → classify → commit cycle."""
        with self._tick_lock:
            now = now or datetime.now(tz=UTC)
            machines = self.store.get_live_machines()

            samples = self._mutate(machines)
            batch = self._classify(machines, samples, now)
            snapshot = self.store.commit(samples, batch, now)

            logger.debug(
                "Tick %d: %d machines updated, %d anomalies",
                snapshot.tick, len(samples), len(batch),
            )
            return snapshot
