from __future__ import annotations

import re
from typing import Optional, Union

from inbox_triage.config.logging import get_logger
from inbox_triage.drafts import tones
from inbox_triage.drafts.templates import BaseResponse, select_template
from inbox_triage.models import Email, ResponseDraft, ThreadSummary, Tone, ToneAlternative
from inbox_triage.pipeline.context import NoiseSource

logger = get_logger(__name__)

DEFAULT_SIGNER = "Your Name"
DRAFT_CONFIDENCE_RANGE = (80.0, 100.0)
ALTERNATIVE_CONFIDENCE_RANGE = (80.0, 95.0)


def as_reply_subject(subject: str) -> str:
    cleaned = subject.strip()
    if not cleaned:
        return "Re: (no subject)"
    match = re.match(r"^(re|aw|sv)\s*:\s*(.*)$", cleaned, flags=re.IGNORECASE)
    if match:
        tail = match.group(2).strip()
        if not tail:
            return "Re: (no subject)"
        return f"Re: {tail}"
    return f"Re: {cleaned}"


def _coerce_tone(tone: Union[Tone, str, None]) -> Tone:
    if tone is None:
        return Tone.PROFESSIONAL
    try:
        return Tone(tone)
    except ValueError:
        logger.warning("unknown tone %r, rendering as professional", tone)
        return Tone.PROFESSIONAL


def render(
    base: BaseResponse,
    tone: Tone,
    context: Optional[ThreadSummary] = None,
    signer: str = DEFAULT_SIGNER,
) -> str:
    if tone == Tone.FRIENDLY:
        return tones.friendly(base, signer)
    if tone == Tone.SHORT:
        return tones.short(base, signer)
    if tone == Tone.DETAILED:
        return tones.detailed(base, signer, context)
    return tones.professional(base, signer)


def generate_response(
    email: Email,
    tone: Union[Tone, str, None],
    context: Optional[ThreadSummary] = None,
    *,
    signer: str = DEFAULT_SIGNER,
) -> str:
    """Pick a template from the subject and render it in the requested tone."""
    base = select_template(email.subject or "", context)
    return render(base, _coerce_tone(tone), context, signer)


def draft_response(
    email: Email,
    tone: Union[Tone, str, None],
    context: Optional[ThreadSummary] = None,
    *,
    noise: NoiseSource,
    signer: str = DEFAULT_SIGNER,
) -> ResponseDraft:
    chosen = _coerce_tone(tone)
    base = select_template(email.subject or "", context)

    alt_low, alt_high = ALTERNATIVE_CONFIDENCE_RANGE
    # Same base response in every other tone, each with its own jitter.
    alternatives = tuple(
        ToneAlternative(
            tone=other,
            body=render(base, other, context, signer),
            confidence=noise.uniform(alt_low, alt_high),
        )
        for other in Tone
        if other != chosen
    )

    low, high = DRAFT_CONFIDENCE_RANGE
    return ResponseDraft(
        body=render(base, chosen, context, signer),
        subject=as_reply_subject(email.subject or ""),
        tone=chosen,
        confidence=noise.uniform(low, high),
        template=base.name,
        context=context.summary if context else None,
        alternatives=alternatives,
    )
