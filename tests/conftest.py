"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the foundry telemetry test suite.
"""
import os
from datetime import datetime, timezone

import numpy as np
import pytest

os.environ.setdefault("SIMULATION_SEED", "42")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def noise(rng):
    from src.data.simulator import NoiseSource
    return NoiseSource(rng)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def moulder_envelope():
    """DISA-style moulding line envelope: 80/100/120/130 bar, 35/40/45/50 °C, 5/10 %."""
    from src.data.models import OperatingEnvelope
    return OperatingEnvelope.model_validate({
        "moulding_pressure": {"min": 80, "ideal": 100, "max": 120, "critical_max": 130},
        "sand_temperature": {"min": 35, "ideal": 40, "max": 45, "critical_max": 50},
        "cycle_time_variance_pct": {"max": 5, "critical_max": 10},
    })


@pytest.fixture
def unmonitored_envelope():
    """Auxiliary equipment: nothing monitored."""
    from src.data.models import OperatingEnvelope
    zero = {"min": 0, "ideal": 0, "max": 0, "critical_max": 0}
    return OperatingEnvelope.model_validate({
        "moulding_pressure": zero,
        "sand_temperature": zero,
        "cycle_time_variance_pct": {"max": 0, "critical_max": 0},
    })


@pytest.fixture
def running_machine(moulder_envelope):
    from src.data.catalog import ideal_sample
    from src.data.models import Machine, OperationalState
    return Machine(
        id="M1",
        name="Moulder 1",
        type="Molding solutions",
        location="Foundry Line 1",
        operational_state=OperationalState.RUNNING,
        envelope=moulder_envelope,
        live_sample=ideal_sample(moulder_envelope),
    )


@pytest.fixture
def idle_machine(moulder_envelope):
    from src.data.models import LiveSample, Machine, OperationalState
    return Machine(
        id="M2",
        name="Moulder 2",
        type="Molding solutions",
        location="Foundry Line 2",
        operational_state=OperationalState.IDLE,
        envelope=moulder_envelope,
        live_sample=LiveSample(moulding_pressure=95.0, sand_temperature=41.0, cycle_time_variance_pct=2.0),
    )


@pytest.fixture
def down_machine(moulder_envelope):
    from src.data.models import LiveSample, Machine, OperationalState
    return Machine(
        id="M3",
        name="Moulder 3",
        type="Molding solutions",
        location="Foundry Line 3",
        operational_state=OperationalState.DOWN,
        envelope=moulder_envelope,
        live_sample=LiveSample(moulding_pressure=140.0, sand_temperature=60.0, cycle_time_variance_pct=30.0),
    )


@pytest.fixture
def fleet(running_machine, idle_machine, down_machine):
    return [running_machine, idle_machine, down_machine]


@pytest.fixture
def store(fleet):
    from src.data.store import FleetStore
    return FleetStore(fleet)


@pytest.fixture
def make_record(now):
    """Factory for anomaly records with distinct ids."""
    from src.data.models import AnomalyRecord

    counter = {"n": 0}

    def _make(machine_id: str = "M1", severity: str = "Warning", parameter: str = "Moulding Pressure"):
        counter["n"] += 1
        return AnomalyRecord(
            id=f"rec-{counter['n']}",
            timestamp=now,
            machine_id=machine_id,
            machine_name=f"Machine {machine_id}",
            parameter=parameter,
            value=125.0,
            expected="80-120",
            severity=severity,
        )

    return _make
