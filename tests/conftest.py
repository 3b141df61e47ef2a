from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, List, Tuple

import pytest

from inbox_triage.config.settings import TriageSettings
from inbox_triage.models import Email, Message
from inbox_triage.pipeline.context import AnalysisContext, FixedClock

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class StubNoise:
    """Deterministic noise: always the same fraction of the requested range."""

    def __init__(self, fraction: float = 0.0) -> None:
        self.fraction = fraction
        self.calls: List[Tuple[float, float]] = []

    def uniform(self, low: float, high: float) -> float:
        self.calls.append((low, high))
        return low + self.fraction * (high - low)


def make_email(**overrides: Any) -> Email:
    fields: dict[str, Any] = {
        "email_id": "e1",
        "sender": "alice@example.com",
        "subject": "Hello",
        "body": "Just checking in.",
        "timestamp": NOW - timedelta(hours=1),
    }
    fields.update(overrides)
    return Email(**fields)


def make_thread(*contents: str) -> Tuple[Message, ...]:
    return tuple(
        Message(sender=f"user{i}@example.com", content=c, timestamp=NOW - timedelta(hours=10 - i))
        for i, c in enumerate(contents)
    )


@pytest.fixture
def noise() -> StubNoise:
    return StubNoise()


@pytest.fixture
def ctx(noise: StubNoise) -> AnalysisContext:
    return AnalysisContext(settings=TriageSettings(), noise=noise, clock=FixedClock(NOW))
