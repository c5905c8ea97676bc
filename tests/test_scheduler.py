"""
tests/test_scheduler.py
────────────────────────
Tests for the telemetry scheduler: tick cycle, failure isolation, lifecycle.
"""
import threading
import time
from datetime import timedelta

import pytest

from config.machines import MACHINE_CATALOG
from src.data.catalog import load_catalog
from src.data.models import LiveSample, OperationalState
from src.data.simulator import NoiseSource
from src.data.store import FleetStore
from src.engine import scheduler as scheduler_module
from src.engine.scheduler import ConfigurationError, TelemetryScheduler


@pytest.fixture
def scheduler(store):
    return TelemetryScheduler(store, noise=NoiseSource.seeded(42), interval_ms=3_000)


class TestTick:
    def test_only_running_machines_mutate(self, store, scheduler, now):
        before = {m.id: m.live_sample for m in store.get_live_machines()}
        for i in range(20):
            scheduler.tick(now + timedelta(seconds=3 * i))
        after = {m.id: m.live_sample for m in store.get_live_machines()}
        assert after["M2"] == before["M2"]
        assert after["M3"] == before["M3"]
        assert store.ticks == 20

    def test_non_running_machines_never_recorded(self, store, scheduler, now):
        # M3 is Down with a sample far outside its envelope
        for i in range(50):
            scheduler.tick(now + timedelta(seconds=3 * i))
        assert all(a.machine_id == "M1" for a in store.get_anomalies())

    def test_ledger_bounded(self, now):
        fleet = load_catalog(MACHINE_CATALOG)
        store = FleetStore(fleet)
        sched = TelemetryScheduler(store, noise=NoiseSource.seeded(1))
        for i in range(500):
            sched.tick(now + timedelta(seconds=3 * i))
        assert 0 < len(store.get_anomalies()) <= 50

    def test_end_to_end_critical_pressure(self, store, scheduler, now, monkeypatch):
        spiked = LiveSample(moulding_pressure=140.0, sand_temperature=40.0, cycle_time_variance_pct=1.0)
        monkeypatch.setattr(scheduler_module, "mutate_sample", lambda envelope, previous, noise: spiked)

        snap = scheduler.tick(now)

        first = snap.anomalies[0]
        assert first.machine_id == "M1"
        assert first.severity == "Critical"
        assert first.parameter == "Moulding Pressure"
        assert first.expected == "< 130"
        assert first.value == 140.0
        assert len(snap.anomalies) == 1
        assert store.get_machine("M1").live_sample == spiked

    def test_batch_keeps_fleet_order(self, store, scheduler, now, monkeypatch):
        store.set_operational_state("M2", OperationalState.RUNNING)
        spiked = LiveSample(moulding_pressure=125.0, sand_temperature=40.0, cycle_time_variance_pct=7.0)
        monkeypatch.setattr(scheduler_module, "mutate_sample", lambda envelope, previous, noise: spiked)

        snap = scheduler.tick(now)

        assert [(a.machine_id, a.parameter) for a in snap.anomalies] == [
            ("M1", "Moulding Pressure"),
            ("M1", "Cycle Time Variance"),
            ("M2", "Moulding Pressure"),
            ("M2", "Cycle Time Variance"),
        ]

    def test_mutation_failure_isolated(self, store, scheduler, now, monkeypatch):
        store.set_operational_state("M2", OperationalState.RUNNING)
        good = LiveSample(moulding_pressure=101.0, sand_temperature=41.0, cycle_time_variance_pct=1.0)
        initial_m1 = store.get_machine("M1").live_sample

        def flaky(envelope, previous, noise):
            if previous == initial_m1:
                raise RuntimeError("sensor bus down")
            return good

        monkeypatch.setattr(scheduler_module, "mutate_sample", flaky)
        snap = scheduler.tick(now)

        assert snap.tick == 1
        assert store.get_machine("M1").live_sample == initial_m1
        assert store.get_machine("M2").live_sample == good

    def test_classification_failure_isolated(self, store, scheduler, now, monkeypatch):
        store.set_operational_state("M2", OperationalState.RUNNING)
        spiked = LiveSample(moulding_pressure=140.0, sand_temperature=40.0, cycle_time_variance_pct=1.0)
        monkeypatch.setattr(scheduler_module, "mutate_sample", lambda envelope, previous, noise: spiked)
        real_classify = scheduler_module.classify

        def flaky(machine, sample=None, timestamp=None):
            if machine.id == "M1":
                raise RuntimeError("bad envelope")
            return real_classify(machine, sample, timestamp)

        monkeypatch.setattr(scheduler_module, "classify", flaky)
        snap = scheduler.tick(now)

        assert [a.machine_id for a in snap.anomalies] == ["M2"]
        assert store.get_machine("M1").live_sample == spiked

    def test_state_change_during_tick_keeps_machine_frozen(self, store, scheduler, now, monkeypatch):
        before = store.get_machine("M1").live_sample
        spiked = LiveSample(moulding_pressure=140.0, sand_temperature=40.0, cycle_time_variance_pct=1.0)

        def operator_stops_machine(envelope, previous, noise):
            store.set_operational_state("M1", OperationalState.DOWN)
            return spiked

        monkeypatch.setattr(scheduler_module, "mutate_sample", operator_stops_machine)
        snap = scheduler.tick(now)

        m1 = store.get_machine("M1")
        assert m1.operational_state == OperationalState.DOWN
        assert m1.live_sample == before
        assert snap.anomalies == ()
        assert snap.tick == 1

    def test_broken_noise_keeps_ticking(self, store, now):
        class Broken:
            def uniform(self, low, high):
                raise RuntimeError("no entropy")

            def random(self):
                raise RuntimeError("no entropy")

        sched = TelemetryScheduler(store, noise=NoiseSource(Broken()))
        sched.tick(now)
        sample = store.get_machine("M1").live_sample
        assert sample.moulding_pressure == 100.0
        assert store.get_anomalies() == []


class TestLifecycle:
    def test_empty_store_rejected(self):
        with pytest.raises(ConfigurationError):
            TelemetryScheduler(FleetStore([])).start()

    def test_non_positive_interval_rejected(self, store):
        with pytest.raises(ConfigurationError):
            TelemetryScheduler(store, interval_ms=0).start()

    def test_start_and_stop(self, store):
        sched = TelemetryScheduler(store, noise=NoiseSource.seeded(3), interval_ms=10)
        sched.start()
        sched.start()  # idempotent
        try:
            deadline = time.monotonic() + 5.0
            while store.ticks < 3 and time.monotonic() < deadline:
                time.sleep(0.01)
        finally:
            sched.stop(timeout=2.0)
        assert store.ticks >= 3
        assert not sched.is_running

        stopped_at = store.ticks
        time.sleep(0.05)
        assert store.ticks == stopped_at

    def test_subscriber_sees_scheduled_ticks(self, store):
        sub = store.subscribe()
        sched = TelemetryScheduler(store, noise=NoiseSource.seeded(4), interval_ms=10)
        sched.start()
        try:
            first = sub.get(timeout=5.0)
        finally:
            sched.stop(timeout=2.0)
        assert first is not None
        assert first.tick == 1

    def test_restart_waits_for_lingering_loop(self, store, monkeypatch):
        entered = threading.Event()
        release = threading.Event()
        real_mutate = scheduler_module.mutate_sample

        def slow_mutate(envelope, previous, noise):
            entered.set()
            release.wait(5.0)
            return real_mutate(envelope, previous, noise)

        monkeypatch.setattr(scheduler_module, "mutate_sample", slow_mutate)
        sched = TelemetryScheduler(store, noise=NoiseSource.seeded(5), interval_ms=10)
        sched.start()
        try:
            assert entered.wait(5.0)
            sched.stop(timeout=0.01)
            assert sched.is_running
            with pytest.raises(RuntimeError, match="still finishing"):
                sched.start()
        finally:
            release.set()
            sched.stop(timeout=5.0)
        assert not sched.is_running

        sched.start()
        try:
            loops = [t for t in threading.enumerate() if t.name == "FoundryTelemetryLoop" and t.is_alive()]
            assert len(loops) == 1
        finally:
            sched.stop(timeout=5.0)

    def test_old_loop_exits_after_timed_out_stop(self, store, monkeypatch):
        entered = threading.Event()
        release = threading.Event()
        real_mutate = scheduler_module.mutate_sample

        def slow_mutate(envelope, previous, noise):
            entered.set()
            release.wait(5.0)
            return real_mutate(envelope, previous, noise)

        monkeypatch.setattr(scheduler_module, "mutate_sample", slow_mutate)
        sched = TelemetryScheduler(store, noise=NoiseSource.seeded(6), interval_ms=10)
        sched.start()
        assert entered.wait(5.0)
        old_loop = sched._thread
        sched.stop(timeout=0.01)
        release.set()
        old_loop.join(timeout=5.0)

        assert not old_loop.is_alive()
        ticks = store.ticks
        time.sleep(0.05)
        assert store.ticks == ticks
