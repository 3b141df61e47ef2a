from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import HTTPException

from backend.app.api.schemas import EmailPayload, SettingsPayload
from inbox_triage.config.settings import load_settings
from inbox_triage.errors import AnalysisFailed, MalformedEmail, TriageError
from inbox_triage.models import Email
from inbox_triage.parsing.parser import email_from_record
from inbox_triage.pipeline.context import AnalysisContext


def context_for(settings: Optional[SettingsPayload]) -> AnalysisContext:
    # Request settings win; otherwise the INBOX_TRIAGE_* environment decides.
    resolved = settings.to_settings() if settings else load_settings()
    return AnalysisContext.from_settings(resolved)


def parse_email(payload: EmailPayload) -> Email:
    try:
        return email_from_record(payload.to_record())
    except MalformedEmail as exc:
        raise http_error(exc) from exc


def http_error(exc: TriageError) -> HTTPException:
    detail: Dict[str, Any] = {
        "code": exc.kind.replace("-", "_"),
        "message": str(exc),
    }
    if isinstance(exc, MalformedEmail):
        detail["field"] = exc.field_name
        return HTTPException(status_code=400, detail=detail)
    if isinstance(exc, AnalysisFailed):
        detail["stage"] = exc.stage
    return HTTPException(status_code=500, detail=detail)
