"""
config/alerts.py
────────────────
Anomaly severity levels, monitored parameters, and display configuration.
"""

from enum import Enum


class AnomalySeverity(str, Enum):
    WARNING = "Warning"
    CRITICAL = "Critical"


class MonitoredParameter(str, Enum):
    MOULDING_PRESSURE = "Moulding Pressure"
    SAND_TEMPERATURE = "Sand Temperature"
    CYCLE_TIME_VARIANCE = "Cycle Time Variance"


# Evaluation order within a single machine
PARAMETER_ORDER: tuple[MonitoredParameter, ...] = (
    MonitoredParameter.MOULDING_PRESSURE,
    MonitoredParameter.SAND_TEMPERATURE,
    MonitoredParameter.CYCLE_TIME_VARIANCE,
)

PARAMETER_UNITS: dict[str, str] = {
    MonitoredParameter.MOULDING_PRESSURE: "bar",
    MonitoredParameter.SAND_TEMPERATURE: "°C",
    MonitoredParameter.CYCLE_TIME_VARIANCE: "%",
}

SEVERITY_COLORS: dict[str, str] = {
    AnomalySeverity.WARNING: "#e8a020",
    AnomalySeverity.CRITICAL: "#da3633",
}

SEVERITY_BG: dict[str, str] = {
    AnomalySeverity.WARNING: "rgba(232,160,32,0.12)",
    AnomalySeverity.CRITICAL: "rgba(218,54,51,0.12)",
}

STATE_COLORS: dict[str, str] = {
    "Running": "#2ea44f",
    "Idle": "#e8a020",
    "Down": "#da3633",
}

# Maximum records retained in the anomaly ledger
LEDGER_CAP = 50
