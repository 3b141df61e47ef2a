# src/inbox_triage/app/run.py
from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable, Sequence

from inbox_triage.config.logging import get_logger
from inbox_triage.dashboard.stats import confidence_level, dashboard_stats, time_ago
from inbox_triage.errors import AnalysisFailed
from inbox_triage.extractors.summary import summarize_content
from inbox_triage.models import CategoryResult, Email, EmailAnalysis, EmailStatus
from inbox_triage.pipeline.context import AnalysisContext
from inbox_triage.pipeline.orchestrator import analyze_email
from inbox_triage.pipeline.policy import suggestions_from_analysis

logger = get_logger(__name__)

ProgressCallback = Callable[[str, Dict[str, Any]], None]


@dataclass
class RunSummary:
    processed: int
    skipped_archived: int
    errors: int
    emails_seen: int
    manual_review: int
    categories: Dict[str, int]


def _sort_key(email: Email) -> tuple:
    # Unknown timestamps go first so they are not mistaken for the newest mail.
    ts = email.timestamp or datetime.min.replace(tzinfo=timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (ts, email.email_id)


def result_record(email: Email, analysis: EmailAnalysis, now: datetime) -> Dict[str, Any]:
    """JSON-serializable view of one analysed email."""
    category = analysis.category
    return {
        "email_id": email.email_id,
        "from": email.sender,
        "subject": email.subject,
        "received": time_ago(email.timestamp, now),
        "preview": summarize_content(email.body),
        "category": category.category.value,
        "confidence": category.confidence,
        "confidence_level": confidence_level(category.confidence),
        "manual_review": category.manual_review,
        "reasoning": category.reasoning,
        "summary": analysis.summary.summary,
        "action_items": list(analysis.summary.action_items),
        "draft": analysis.response.body,
        "suggestions": [
            {"kind": s.kind, "title": s.title, "description": s.description}
            for s in suggestions_from_analysis(email, analysis, now=now)
        ],
    }


def run_once(
    emails: Sequence[Email],
    ctx: AnalysisContext,
    *,
    progress_cb: Optional[ProgressCallback] = None,
) -> Dict[str, Any]:
    """
    Triage a batch of emails and return a machine-readable summary.

    Args:
        emails: Parsed emails from the store.
        ctx: Settings, noise source and clock for every pipeline call.
        progress_cb: Optional callback receiving (step, payload) events.

    Returns:
        dict summary (JSON-serializable) with per-email results.
    """
    def report(
        step: str,
        *,
        detail: str | None = None,
        metrics: Optional[Dict[str, Any]] = None,
        **extra: Any,
    ) -> None:
        if not progress_cb:
            return
        # Normalize the payload shape for both UI and CLI consumers.
        payload: Dict[str, Any] = {"detail": detail}
        if metrics:
            payload["metrics"] = metrics
        if extra:
            payload.update(extra)
        progress_cb(step, payload)

    now = ctx.clock.now()
    processed = 0
    errors = 0
    manual_review = 0
    category_counts: Counter[str] = Counter()
    results: List[Dict[str, Any]] = []
    failures: List[Dict[str, Any]] = []
    category_results: Dict[str, CategoryResult] = {}

    # Archived mail is done; everything else is processed oldest first.
    eligible = sorted((e for e in emails if e.status != EmailStatus.ARCHIVED), key=_sort_key)
    skipped_archived = len(emails) - len(eligible)
    total = len(eligible)
    logger.info("triaging %d emails (%d archived skipped)", total, skipped_archived)

    def metrics() -> Dict[str, Any]:
        return {
            "processed": processed,
            "emails_seen": total,
            "skipped_archived": skipped_archived,
            "errors": errors,
        }

    report("processing", detail=f"Processing 0/{total}", metrics=metrics())

    for index, email in enumerate(eligible, start=1):
        try:
            analysis = analyze_email(email, ctx)
            record = result_record(email, analysis, now)
            results.append(record)
            category_results[email.email_id] = analysis.category
            category_counts[analysis.category.category.value] += 1
            if analysis.category.manual_review:
                manual_review += 1
            processed += 1
            report("result", detail=f"Categorized {email.email_id}", result=record)
        except Exception as exc:
            # One bad email must not abort the batch.
            errors += 1
            logger.warning("email %s failed: %s", email.email_id, exc)
            failure = {
                "email_id": email.email_id,
                "from": email.sender,
                "subject": email.subject,
                "kind": getattr(exc, "kind", AnalysisFailed.kind),
                "error": str(exc),
            }
            failures.append(failure)
            report("error", detail=f"{type(exc).__name__}: {exc}", error=failure)
        finally:
            report("processing", detail=f"Processing {index}/{total}", metrics=metrics())

    summary = RunSummary(
        processed=processed,
        skipped_archived=skipped_archived,
        errors=errors,
        emails_seen=total,
        manual_review=manual_review,
        categories=dict(category_counts),
    )
    report("done", detail="Run completed", metrics=metrics())

    return {
        **asdict(summary),
        "dashboard": dashboard_stats(list(emails), category_results).as_dict(),
        "results": results,
        "failures": failures,
    }


def write_report(summary: Dict[str, Any], reports_dir: Path) -> Path:
    reports_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    path = reports_dir / f"triage-{stamp}.json"
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    return path
