"""
src/analytics/thresholds.py
────────────────────────────
Multi-tier threshold classifier.

Provides:
  - Per-parameter Warning / Critical evaluation against the machine envelope
  - AnomalyRecord construction for one machine's live sample
  - Status + colour helpers for dashboard gauges

Rule (pressure, temperature):
  value > critical_max        → Critical, expected "< {critical_max}"
  value > max or value < min  → Warning,  expected "{min}-{max}"

Rule (cycle-time variance, no lower bound):
  value > critical_max        → Critical, expected "< {critical_max}%"
  value > max                 → Warning,  expected "< {max}%"

Parameters whose envelope is all zeros are not monitored and never breach.
"""
from __future__ import annotations

import uuid
from datetime import UTC, datetime

from config.alerts import PARAMETER_ORDER, AnomalySeverity, MonitoredParameter
from src.data.models import (
    AnomalyRecord,
    LiveSample,
    Machine,
    OperatingEnvelope,
    ParameterEnvelope,
    VarianceEnvelope,
)

Envelope = ParameterEnvelope | VarianceEnvelope


def _fmt(bound: float) -> str:
    return f"{bound:g}"


def envelope_for(parameter: MonitoredParameter, envelope: OperatingEnvelope) -> Envelope:
    if parameter == MonitoredParameter.MOULDING_PRESSURE:
        return envelope.moulding_pressure
    if parameter == MonitoredParameter.SAND_TEMPERATURE:
        return envelope.sand_temperature
    return envelope.cycle_time_variance_pct


def value_for(parameter: MonitoredParameter, sample: LiveSample) -> float:
    if parameter == MonitoredParameter.MOULDING_PRESSURE:
        return sample.moulding_pressure
    if parameter == MonitoredParameter.SAND_TEMPERATURE:
        return sample.sand_temperature
    return sample.cycle_time_variance_pct


def evaluate_parameter(
    value: float,
    band: Envelope,
) -> tuple[AnomalySeverity, str] | None:
    """
    Classify one reading against its envelope.

    Returns:
        (severity, expected) for a breach, None when nominal or unmonitored.
    """
    if band.is_zero:
        return None

    if isinstance(band, VarianceEnvelope):
        if value > band.critical_max:
            return AnomalySeverity.CRITICAL, f"< {_fmt(band.critical_max)}%"
        if value > band.max:
            return AnomalySeverity.WARNING, f"< {_fmt(band.max)}%"
        return None

    if value > band.critical_max:
        return AnomalySeverity.CRITICAL, f"< {_fmt(band.critical_max)}"
    if value > band.max or value < band.min:
        return AnomalySeverity.WARNING, f"{_fmt(band.min)}-{_fmt(band.max)}"
    return None


def classify(
    machine: Machine,
    sample: LiveSample | None = None,
    timestamp: datetime | None = None,
) -> list[AnomalyRecord]:
    """
    Evaluate a machine's sample and build 0-3 anomaly records.

    Records follow pressure → temperature → variance order and share the
    same timestamp; each gets a fresh id.
    """
    sample = sample if sample is not None else machine.live_sample
    ts = timestamp or datetime.now(tz=UTC)
    records: list[AnomalyRecord] = []

    for parameter in PARAMETER_ORDER:
        value = value_for(parameter, sample)
        result = evaluate_parameter(value, envelope_for(parameter, machine.envelope))
        if result is None:
            continue
        severity, expected = result
        records.append(AnomalyRecord(
            id=str(uuid.uuid4()),
            timestamp=ts,
            machine_id=machine.id,
            machine_name=machine.name,
            parameter=parameter,
            value=value,
            expected=expected,
            severity=severity,
        ))

    return records


# ── Dashboard helpers ─────────────────────────────────────────────────────────

STATUS_COLORS = {
    "ok": "#2ea44f",
    "warning": "#e8a020",
    "critical": "#da3633",
    "off": "#8b949e",
}


def parameter_status(value: float, band: Envelope) -> str:
    """Returns: "ok" | "warning" | "critical" | "off" (unmonitored)."""
    if band.is_zero:
        return "off"
    result = evaluate_parameter(value, band)
    if result is None:
        return "ok"
    return "critical" if result[0] == AnomalySeverity.CRITICAL else "warning"


def get_value_color(value: float, band: Envelope) -> str:
    return STATUS_COLORS[parameter_status(value, band)]
