"""
src/data/simulator.py
─────────────────────
Live telemetry mutator for the foundry fleet.

Each tick, a running machine's sample is redrawn around its envelope:
  - pressure / temperature: ideal ± U(-band, +band), band = 10% of (max - min)
  - cycle-time variance:   U(0, 0.8 × max)

Spike injection, independent per parameter:
  - 2%: pressure    × (1 + U(0, 0.4))
  - 2%: temperature × (1 + U(0, 0.3))
  - 5%: variance    = max + U(0, 5)

Design:
  - All randomness goes through a NoiseSource so tests can seed it
  - The model is memoryless; the previous sample is accepted but not used
"""
from __future__ import annotations

import logging

import numpy as np

from src.data.models import LiveSample, OperatingEnvelope, ParameterEnvelope

logger = logging.getLogger(__name__)

FUZZ_FRACTION = 0.10
VARIANCE_DRAW_FRACTION = 0.8

PRESSURE_SPIKE_PROBABILITY = 0.02
PRESSURE_SPIKE_MAX = 0.4
TEMPERATURE_SPIKE_PROBABILITY = 0.02
TEMPERATURE_SPIKE_MAX = 0.3
VARIANCE_SPIKE_PROBABILITY = 0.05
VARIANCE_SPIKE_EXCESS = 5.0


class NoiseSource:
    """
    Random draws used by the mutator, backed by a numpy Generator.

    If the generator fails, a fixed fallback is returned for that draw
    (interval midpoint for uniform, no spike for chance).
    """

    def __init__(self, rng: np.random.Generator | None = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def seeded(cls, seed: int | None) -> NoiseSource:
        return cls(np.random.default_rng(seed))

    def uniform(self, low: float, high: float) -> float:
        try:
            return float(self.rng.uniform(low, high))
        except Exception:
            logger.warning("Noise source failed; using midpoint of [%s, %s]", low, high, exc_info=True)
            return (low + high) / 2.0

    def chance(self, probability: float) -> bool:
        try:
            return bool(self.rng.random() < probability)
        except Exception:
            logger.warning("Noise source failed; suppressing spike (p=%s)", probability, exc_info=True)
            return False


def _around_ideal(band: ParameterEnvelope, noise: NoiseSource) -> float:
    fuzz = (band.max - band.min) * FUZZ_FRACTION
    return band.ideal + noise.uniform(-fuzz, fuzz)


def mutate_sample(
    envelope: OperatingEnvelope,
    previous: LiveSample | None,
    noise: NoiseSource,
) -> LiveSample:
    """
    Draw a fresh live sample for one running machine.

    Args:
        envelope: The machine's operating envelope
        previous: Sample from the prior tick (unused by this model)
        noise: Random source for reproducible draws

    Returns:
        New LiveSample; values are clipped at 0 and kept unrounded so
        classification sees the exact reading.
    """
    pressure = _around_ideal(envelope.moulding_pressure, noise)
    temperature = _around_ideal(envelope.sand_temperature, noise)
    variance_max = envelope.cycle_time_variance_pct.max
    variance = noise.uniform(0.0, variance_max * VARIANCE_DRAW_FRACTION)

    if noise.chance(PRESSURE_SPIKE_PROBABILITY):
        pressure *= 1.0 + noise.uniform(0.0, PRESSURE_SPIKE_MAX)
    if noise.chance(TEMPERATURE_SPIKE_PROBABILITY):
        temperature *= 1.0 + noise.uniform(0.0, TEMPERATURE_SPIKE_MAX)
    if noise.chance(VARIANCE_SPIKE_PROBABILITY):
        variance = variance_max + noise.uniform(0.0, VARIANCE_SPIKE_EXCESS)

    return LiveSample(
        moulding_pressure=float(np.clip(pressure, 0.0, None)),
        sand_temperature=float(np.clip(temperature, 0.0, None)),
        cycle_time_variance_pct=float(np.clip(variance, 0.0, None)),
    )
