from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter

from backend.app.api.common import context_for, http_error, parse_email
from backend.app.api.schemas import RespondRequest
from inbox_triage.errors import TriageError
from inbox_triage.pipeline.orchestrator import respond_to_email, summarize_email

router = APIRouter()


@router.post("/respond")
def respond_endpoint(payload: RespondRequest) -> dict[str, Any]:
    email = parse_email(payload.email)
    ctx = context_for(payload.settings)

    try:
        # Meeting/follow-up templates quote the thread summary when it is available.
        context = summarize_email(email, ctx) if payload.include_context else None
        draft = respond_to_email(email, ctx, tone=payload.tone, context=context)
    except TriageError as exc:
        raise http_error(exc) from exc

    return {
        "ok": True,
        "draft": asdict(draft),
        "auto_reply": ctx.settings.auto_reply,
    }
