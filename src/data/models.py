"""
src/data/models.py
──────────────────
Pydantic v2 data models for machines, envelopes, live samples and anomalies.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from config.alerts import AnomalySeverity, MonitoredParameter


class OperationalState(str, Enum):
    RUNNING = "Running"
    IDLE = "Idle"
    DOWN = "Down"


class ParameterEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = Field(ge=0.0)
    ideal: float = Field(ge=0.0)
    max: float = Field(ge=0.0)
    critical_max: float = Field(ge=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> "ParameterEnvelope":
        if not self.min <= self.ideal <= self.max <= self.critical_max:
            raise ValueError(
                f"envelope bounds out of order: min={self.min} ideal={self.ideal} "
                f"max={self.max} critical_max={self.critical_max}"
            )
        return self

    @property
    def is_zero(self) -> bool:
        return self.min == self.ideal == self.max == self.critical_max == 0.0


class VarianceEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    max: float = Field(ge=0.0)
    critical_max: float = Field(ge=0.0)

    @model_validator(mode="after")
    def _check_order(self) -> "VarianceEnvelope":
        if self.max > self.critical_max:
            raise ValueError(f"variance max {self.max} exceeds critical_max {self.critical_max}")
        return self

    @property
    def is_zero(self) -> bool:
        return self.max == self.critical_max == 0.0


class OperatingEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    moulding_pressure: ParameterEnvelope
    sand_temperature: ParameterEnvelope
    cycle_time_variance_pct: VarianceEnvelope


class LiveSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    moulding_pressure: float = Field(ge=0.0)
    sand_temperature: float = Field(ge=0.0)
    cycle_time_variance_pct: float = Field(ge=0.0)


class Machine(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    type: str
    location: str
    operational_state: OperationalState
    envelope: OperatingEnvelope
    live_sample: LiveSample
    ideal_cycle_time_s: float = Field(default=0.0, ge=0.0)
    moulds_per_hour: int = Field(default=0, ge=0)
    energy_kwh: float = Field(default=0.0, ge=0.0)

    @property
    def is_running(self) -> bool:
        return self.operational_state == OperationalState.RUNNING


class AnomalyRecord(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    timestamp: datetime
    machine_id: str
    machine_name: str
    parameter: MonitoredParameter
    value: float
    expected: str
    severity: AnomalySeverity


class FleetSnapshot(BaseModel):
    """Consistent view of the fleet as of one committed tick."""
    model_config = ConfigDict(frozen=True)

    tick: int = Field(default=0, ge=0)
    timestamp: datetime | None = None
    machines: tuple[Machine, ...] = ()
    anomalies: tuple[AnomalyRecord, ...] = ()
