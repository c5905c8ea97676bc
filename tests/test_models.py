"""
tests/test_models.py
─────────────────────
Tests for Pydantic data models.
"""
import pytest
from pydantic import ValidationError

from src.data.models import (
    AnomalyRecord,
    FleetSnapshot,
    LiveSample,
    OperationalState,
    ParameterEnvelope,
    VarianceEnvelope,
)


class TestParameterEnvelope:
    def test_valid_envelope(self):
        band = ParameterEnvelope(min=80, ideal=100, max=120, critical_max=130)
        assert band.ideal == 100.0
        assert not band.is_zero

    def test_all_zero_is_unmonitored(self):
        assert ParameterEnvelope(min=0, ideal=0, max=0, critical_max=0).is_zero

    def test_out_of_order_bounds_rejected(self):
        with pytest.raises(ValidationError):
            ParameterEnvelope(min=80, ideal=100, max=140, critical_max=130)

    def test_negative_bound_rejected(self):
        with pytest.raises(ValidationError):
            ParameterEnvelope(min=-1, ideal=0, max=1, critical_max=2)

    def test_frozen(self):
        band = ParameterEnvelope(min=80, ideal=100, max=120, critical_max=130)
        with pytest.raises(ValidationError):
            band.max = 200


class TestVarianceEnvelope:
    def test_max_above_critical_rejected(self):
        with pytest.raises(ValidationError):
            VarianceEnvelope(max=12, critical_max=10)

    def test_zero_variance(self):
        assert VarianceEnvelope(max=0, critical_max=0).is_zero
        assert not VarianceEnvelope(max=5, critical_max=10).is_zero


class TestLiveSample:
    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            LiveSample(moulding_pressure=-0.1, sand_temperature=40, cycle_time_variance_pct=0)


class TestMachine:
    def test_is_running(self, running_machine, idle_machine, down_machine):
        assert running_machine.is_running
        assert not idle_machine.is_running
        assert not down_machine.is_running

    def test_state_from_string(self, running_machine):
        data = running_machine.model_dump()
        data["operational_state"] = "Down"
        machine = type(running_machine).model_validate(data)
        assert machine.operational_state == OperationalState.DOWN

    def test_unknown_state_rejected(self, running_machine):
        data = running_machine.model_dump()
        data["operational_state"] = "Maintenance"
        with pytest.raises(ValidationError):
            type(running_machine).model_validate(data)

    def test_frozen(self, running_machine):
        with pytest.raises(ValidationError):
            running_machine.operational_state = OperationalState.IDLE


class TestAnomalyRecord:
    def test_enum_values_stored_as_strings(self, now):
        record = AnomalyRecord(
            id="a1",
            timestamp=now,
            machine_id="M1",
            machine_name="Moulder 1",
            parameter="Sand Temperature",
            value=47.0,
            expected="35-45",
            severity="Warning",
        )
        assert record.parameter == "Sand Temperature"
        assert record.severity == "Warning"
        assert record.model_dump()["severity"] == "Warning"

    def test_unknown_severity_rejected(self, now):
        with pytest.raises(ValidationError):
            AnomalyRecord(
                id="a1",
                timestamp=now,
                machine_id="M1",
                machine_name="Moulder 1",
                parameter="Sand Temperature",
                value=47.0,
                expected="35-45",
                severity="Info",
            )


class TestFleetSnapshot:
    def test_defaults(self):
        snap = FleetSnapshot()
        assert snap.tick == 0
        assert snap.timestamp is None
        assert snap.machines == ()
        assert snap.anomalies == ()
