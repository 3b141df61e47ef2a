from __future__ import annotations

from typing import Optional


class TriageError(Exception):
    """Base class for recoverable pipeline failures."""

    kind: str = "triage-error"


class MalformedEmail(TriageError):
    kind = "malformed-input"

    def __init__(self, message: str, *, field_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.field_name = field_name


class AnalysisFailed(TriageError):
    """Unexpected fault inside a stage. Carries no partial result."""

    kind = "analysis-failed"

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage
        self.message = message
