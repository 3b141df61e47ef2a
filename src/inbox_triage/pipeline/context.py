from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol

from inbox_triage.config.settings import TriageSettings


class NoiseSource(Protocol):
    def uniform(self, low: float, high: float) -> float:
        """Return a value drawn uniformly from the half-open range [low, high)."""
        ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class RandomNoise:
    """Confidence jitter backed by random.Random; pass a seed for reproducible runs."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def uniform(self, low: float, high: float) -> float:
        # random() is in [0, 1), which keeps the upper bound exclusive.
        return low + self._rng.random() * (high - low)


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    at: datetime

    def now(self) -> datetime:
        return self.at


@dataclass
class AnalysisContext:
    """Everything a pipeline call may depend on besides the email itself."""

    settings: TriageSettings = field(default_factory=TriageSettings)
    noise: NoiseSource = field(default_factory=RandomNoise)
    clock: Clock = field(default_factory=SystemClock)

    @classmethod
    def from_settings(cls, settings: TriageSettings) -> "AnalysisContext":
        return cls(settings=settings, noise=RandomNoise(settings.seed), clock=SystemClock())
