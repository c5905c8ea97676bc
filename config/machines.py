"""
config/machines.py
──────────────────
Foundry machine catalog and per-parameter operating envelopes.

Envelope bounds per monitored parameter:
  min ≤ value ≤ max           → nominal
  value > max or value < min  → Warning
  value > critical_max        → Critical

Cycle-time variance is a deviation (always ≥ 0) and only carries
max / critical_max. Auxiliary equipment that is not monitored for a
parameter has an all-zero envelope for it.
"""


def _band(min_: float, ideal: float, max_: float, critical_max: float) -> dict[str, float]:
    return {"min": min_, "ideal": ideal, "max": max_, "critical_max": critical_max}


def _variance(max_: float, critical_max: float) -> dict[str, float]:
    return {"max": max_, "critical_max": critical_max}


NOT_MONITORED = _band(0, 0, 0, 0)
NO_VARIANCE = _variance(0, 0)


def _machine(
    id_: str,
    name: str,
    type_: str,
    state: str,
    location: str,
    pressure: dict[str, float],
    temperature: dict[str, float],
    variance: dict[str, float],
    ideal_cycle_time_s: float,
    moulds_per_hour: int,
    energy_kwh: float,
) -> dict:
    return {
        "id": id_,
        "name": name,
        "type": type_,
        "location": location,
        "operational_state": state,
        "ideal_cycle_time_s": ideal_cycle_time_s,
        "moulds_per_hour": moulds_per_hour,
        "energy_kwh": energy_kwh,
        "envelope": {
            "moulding_pressure": pressure,
            "sand_temperature": temperature,
            "cycle_time_variance_pct": variance,
        },
    }


_MOLDING = "Molding solutions"
_SAND = "Sand preparation and cast cooling"
_BLAST = "Shot blasting equipment"

MACHINE_CATALOG: list[dict] = [
    # ── Molding solutions ─────────────────────────────────────────────────────
    _machine("DISA-D-01", "DISAMATIC D3-Z425", _MOLDING, "Running", "Foundry Line 1",
             _band(80, 100, 120, 130), _band(35, 40, 45, 50), _variance(5, 10), 17, 210, 150),
    _machine("DISA-C-01", "DISAMATIC C3-X350", _MOLDING, "Down", "Foundry Line 1",
             _band(85, 105, 125, 135), _band(36, 41, 46, 51), _variance(5, 11), 18, 200, 140),
    _machine("DISA-MATCH-01", "DISA MATCH 28/32", _MOLDING, "Idle", "Foundry Line 2",
             _band(70, 90, 110, 120), _band(38, 42, 48, 52), _variance(6, 12), 20, 180, 120),
    _machine("DISA-FLEX-01", "DISA FLEX 70", _MOLDING, "Running", "Specialty Casting",
             _band(60, 75, 90, 100), _band(40, 45, 50, 55), _variance(7, 15), 25, 150, 180),
    _machine("DISA-ARPA-01", "DISA ARPA 450", _MOLDING, "Idle", "Foundry Line 3",
             _band(50, 65, 80, 90), _band(40, 45, 50, 55), _variance(8, 15), 30, 120, 100),

    # ── Sand preparation and cast cooling ─────────────────────────────────────
    _machine("DISAMIX-01", "DISAMIX TM 190-55", _SAND, "Running", "Sand Plant 1",
             NOT_MONITORED, _band(20, 25, 35, 40), NO_VARIANCE, 1, 0, 80),
    _machine("SMC-01", "Sand Multi Controller (SMC)", _SAND, "Running", "Sand Plant 1",
             NOT_MONITORED, NOT_MONITORED, NO_VARIANCE, 1, 0, 10),
    _machine("DISACOOL-01", "DISACOOL A3", _SAND, "Running", "Cooling Line 1",
             NOT_MONITORED, _band(40, 50, 60, 70), NO_VARIANCE, 1, 0, 50),

    # ── Shot blasting equipment ───────────────────────────────────────────────
    _machine("WB-TUMBLAST-01", "SmartLine Tumblast Machine", _BLAST, "Idle", "Finishing Area",
             NOT_MONITORED, NOT_MONITORED, _variance(10, 20), 180, 20, 250),
    _machine("WB-HANGER-01", "SmartLine Overhead Rail Shot Blast Machine", _BLAST, "Idle", "Finishing Area 2",
             NOT_MONITORED, NOT_MONITORED, _variance(10, 20), 240, 15, 300),
    _machine("WB-ROLLER-01", "Roller Conveyor Type G", _BLAST, "Running", "Large Castings Line",
             NOT_MONITORED, NOT_MONITORED, _variance(10, 20), 120, 30, 400),
    _machine("WB-PEENING-01", "RDS Spring Peening Machine", _BLAST, "Idle", "Specialty Finishing",
             NOT_MONITORED, NOT_MONITORED, _variance(8, 16), 300, 12, 350),
    _machine("WB-AIRBLAST-01", "SmartLine Airblast Cabinet", _BLAST, "Idle", "Manual Finishing",
             NOT_MONITORED, NOT_MONITORED, _variance(5, 10), 600, 6, 100),
    _machine("WB-CONTINUOUS-01", "CT Through-Feed Blast Cleaning Machine", _BLAST, "Running", "Continuous Line",
             NOT_MONITORED, NOT_MONITORED, _variance(10, 20), 15, 240, 450),

    # ── Core making ───────────────────────────────────────────────────────────
    _machine("DISA-CORE-01", "DISA CORE 20 FP", "Core making", "Idle", "Core Shop",
             _band(4, 5, 6, 7), _band(20, 25, 30, 35), _variance(5, 10), 45, 80, 90),
    _machine("DISA-CORE-02", "Core Shooting Machine TP series", "Core making", "Down", "Core Shop",
             _band(3, 4, 5, 6), _band(20, 25, 30, 35), _variance(5, 10), 60, 60, 75),

    # ── Automation ────────────────────────────────────────────────────────────
    _machine("AUTO-AMC-01", "Automatic Mould Conveyor (AMC)", "Automation", "Running", "Foundry Line 1",
             NOT_MONITORED, NOT_MONITORED, _variance(2, 5), 5, 0, 40),
    _machine("AUTO-APC-01", "Automatic Pattern Changer (APC)", "Automation", "Idle", "Foundry Line 2",
             NOT_MONITORED, NOT_MONITORED, _variance(3, 6), 120, 0, 30),

    # ── Industrial filters / digital solutions ────────────────────────────────
    _machine("FILTER-01", "Cartridge Filter ES-8", "Industrial filters", "Running", "Dust Collection",
             NOT_MONITORED, NOT_MONITORED, NO_VARIANCE, 1, 0, 20),
    _machine("DIGITAL-01", "Monitizer® | DISCOVER®", "Digital solutions", "Running", "Control Room",
             NOT_MONITORED, NOT_MONITORED, NO_VARIANCE, 1, 0, 5),
]
