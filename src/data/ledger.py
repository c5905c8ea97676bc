"""
src/data/ledger.py
──────────────────
Bounded, newest-first anomaly ledger.

Each tick's batch is prepended as a block (keeping its evaluation order)
and the ledger is truncated to its cap, dropping the oldest records.
No deduplication: repeated breaches on consecutive ticks each appear.

Not thread-safe on its own; FleetStore serialises access.
"""
from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from config.alerts import LEDGER_CAP
from src.data.models import AnomalyRecord

COLUMNS = [
    "id", "timestamp", "machine_id", "machine_name",
    "parameter", "value", "expected", "severity",
]


class AnomalyLedger:
    def __init__(self, cap: int = LEDGER_CAP):
        if cap <= 0:
            raise ValueError(f"ledger cap must be positive, got {cap}")
        self.cap = cap
        self._records: tuple[AnomalyRecord, ...] = ()

    def __len__(self) -> int:
        return len(self._records)

    def merge(self, batch: Sequence[AnomalyRecord]) -> None:
        if not batch:
            return
        self._records = (tuple(batch) + self._records)[: self.cap]

    def snapshot(self) -> tuple[AnomalyRecord, ...]:
        return self._records

    def clear(self) -> None:
        self._records = ()

    def to_dataframe(self) -> pd.DataFrame:
        """Ledger contents as a DataFrame, newest-first."""
        return pd.DataFrame([r.model_dump() for r in self._records], columns=COLUMNS)
