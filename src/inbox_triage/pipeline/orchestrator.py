from __future__ import annotations

from typing import Callable, Optional, TypeVar, Union

from inbox_triage.config.logging import get_logger
from inbox_triage.drafts.responses import draft_response
from inbox_triage.errors import AnalysisFailed, TriageError
from inbox_triage.extractors.summary import compress_thread, thread_text
from inbox_triage.models import CategoryResult, Email, EmailAnalysis, ResponseDraft, ThreadSummary, Tone
from inbox_triage.pipeline.context import AnalysisContext
from inbox_triage.rules.classification import categorize

logger = get_logger(__name__)

T = TypeVar("T")


def run_stage(stage: str, fn: Callable[[], T]) -> T:
    # Known pipeline errors pass through; anything else becomes AnalysisFailed.
    try:
        return fn()
    except TriageError:
        raise
    except Exception as exc:
        logger.exception("%s stage failed", stage)
        raise AnalysisFailed(stage, f"{type(exc).__name__}: {exc}") from exc


def summarize_email(email: Email, ctx: AnalysisContext) -> ThreadSummary:
    return run_stage(
        "summarize",
        lambda: compress_thread(
            thread_text(email),
            noise=ctx.noise,
            summary_length=ctx.settings.summary_length,
        ),
    )


def categorize_email(email: Email, ctx: AnalysisContext) -> CategoryResult:
    return run_stage(
        "categorize",
        lambda: categorize(email, ctx.settings, noise=ctx.noise, now=ctx.clock.now()),
    )


def respond_to_email(
    email: Email,
    ctx: AnalysisContext,
    *,
    tone: Union[Tone, str, None] = None,
    context: Optional[ThreadSummary] = None,
) -> ResponseDraft:
    return run_stage(
        "respond",
        lambda: draft_response(
            email,
            tone or ctx.settings.default_tone,
            context,
            noise=ctx.noise,
            signer=ctx.settings.signer_name,
        ),
    )


def analyze_email(
    email: Email,
    ctx: AnalysisContext,
    *,
    tone: Union[Tone, str, None] = None,
) -> EmailAnalysis:
    """
    Summarize, categorize and draft a reply for one email.
    Either all three stages succeed or the call raises; no partial result.
    """
    summary = summarize_email(email, ctx)
    category = categorize_email(email, ctx)
    response = respond_to_email(email, ctx, tone=tone, context=summary)

    return EmailAnalysis(
        email_id=email.email_id,
        summary=summary,
        category=category,
        response=response,
    )
