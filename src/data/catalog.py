"""
src/data/catalog.py
───────────────────
Machine catalog loading and validation.

The catalog is supplied once at startup; any problem with it is a
configuration error and is raised as CatalogError.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from src.data.models import LiveSample, Machine, OperatingEnvelope


class CatalogError(ValueError):
    """Raised when the machine catalog is empty or invalid."""


def ideal_sample(envelope: OperatingEnvelope) -> LiveSample:
    """Seed sample: ideal pressure/temperature and zero cycle-time variance."""
    return LiveSample(
        moulding_pressure=envelope.moulding_pressure.ideal,
        sand_temperature=envelope.sand_temperature.ideal,
        cycle_time_variance_pct=0.0,
    )


def _build_machine(index: int, entry: Mapping) -> Machine:
    label = entry.get("id") or f"#{index}"
    try:
        data = dict(entry)
        if data.get("live_sample") is None:
            envelope = OperatingEnvelope.model_validate(data.get("envelope"))
            data["envelope"] = envelope
            data["live_sample"] = ideal_sample(envelope)
        return Machine.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"invalid catalog entry {label}: {exc}") from exc


def load_catalog(entries: Iterable[Mapping]) -> list[Machine]:
    """
    Validate raw catalog entries and build the initial machine records.

    Raises:
        CatalogError: empty catalog, duplicate machine id, or an entry
            that fails model validation.
    """
    machines: list[Machine] = []
    seen: set[str] = set()

    for index, entry in enumerate(entries):
        machine = _build_machine(index, entry)
        if machine.id in seen:
            raise CatalogError(f"duplicate machine id in catalog: {machine.id}")
        seen.add(machine.id)
        machines.append(machine)

    if not machines:
        raise CatalogError("machine catalog is empty")
    return machines
