"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass

from config.alerts import LEDGER_CAP as DEFAULT_LEDGER_CAP


def _optional_int(raw: str) -> int | None:
    raw = raw.strip()
    return int(raw) if raw else None


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Engine tick period in milliseconds
    TICK_INTERVAL_MS: int = int(os.getenv("TICK_INTERVAL_MS", "3000"))

    # Dashboard poll interval in milliseconds
    UI_REFRESH_MS: int = int(os.getenv("UI_REFRESH_MS", "3000"))

    # Simulation (empty → fresh OS entropy on every start)
    SIMULATION_SEED: int | None = _optional_int(os.getenv("SIMULATION_SEED", ""))

    # Anomaly ledger
    LEDGER_CAP: int = int(os.getenv("LEDGER_CAP", str(DEFAULT_LEDGER_CAP)))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
