from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from fastapi import APIRouter

from backend.app.api.common import context_for, http_error, parse_email
from backend.app.api.schemas import AnalyzeRequest, CategorizeRequest, SummarizeRequest
from inbox_triage.config.settings import load_settings
from inbox_triage.errors import TriageError
from inbox_triage.extractors.summary import compress_thread
from inbox_triage.pipeline.context import RandomNoise
from inbox_triage.pipeline.orchestrator import run_stage, analyze_email, categorize_email
from inbox_triage.pipeline.policy import suggestions_from_analysis

router = APIRouter()


@router.get("/settings")
def settings_endpoint() -> Dict[str, Any]:
    return {"ok": True, "settings": load_settings().as_dict()}


@router.post("/categorize")
def categorize_endpoint(payload: CategorizeRequest) -> Dict[str, Any]:
    email = parse_email(payload.email)
    ctx = context_for(payload.settings)
    try:
        result = categorize_email(email, ctx)
    except TriageError as exc:
        raise http_error(exc) from exc
    return {"ok": True, "result": asdict(result)}


@router.post("/summarize")
def summarize_endpoint(payload: SummarizeRequest) -> Dict[str, Any]:
    noise = RandomNoise(payload.seed)
    try:
        summary = run_stage(
            "summarize",
            lambda: compress_thread(
                payload.content,
                noise=noise,
                summary_length=payload.summary_length,
                preserve_context=payload.preserve_context,
                extract_actions=payload.extract_action_items,
            ),
        )
    except TriageError as exc:
        raise http_error(exc) from exc
    return {"ok": True, "result": asdict(summary)}


@router.post("/analyze")
def analyze_endpoint(payload: AnalyzeRequest) -> Dict[str, Any]:
    email = parse_email(payload.email)
    ctx = context_for(payload.settings)
    try:
        analysis = analyze_email(email, ctx, tone=payload.tone)
    except TriageError as exc:
        raise http_error(exc) from exc

    suggestions = suggestions_from_analysis(email, analysis, now=ctx.clock.now())
    return {
        "ok": True,
        "result": asdict(analysis),
        "suggestions": [asdict(s) for s in suggestions],
    }
