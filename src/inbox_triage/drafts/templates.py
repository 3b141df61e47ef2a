from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from inbox_triage.extractors.text import contains_any
from inbox_triage.models import ThreadSummary


@dataclass(frozen=True)
class BaseResponse:
    """Tone-neutral reply skeleton; tones.py turns it into text."""

    name: str
    greeting: str
    acknowledgment: str
    action: str
    closing: str


def _summary_or(context: Optional[ThreadSummary], default: str) -> str:
    if context and context.summary:
        return context.summary
    return default


def meeting_response(context: Optional[ThreadSummary]) -> BaseResponse:
    return BaseResponse(
        name="meeting",
        greeting="Thank you for reaching out about scheduling",
        acknowledgment=f"I've reviewed {_summary_or(context, 'your message')}",
        action="I would be happy to coordinate a time that works for everyone",
        closing="Looking forward to your response",
    )


def follow_up_response(context: Optional[ThreadSummary]) -> BaseResponse:
    return BaseResponse(
        name="follow-up",
        greeting="Thank you for the follow-up",
        acknowledgment=f"I appreciate you checking in on {_summary_or(context, 'this')}",
        action="I will review and get back to you shortly",
        closing="Thank you for your patience",
    )


def thank_you_response(context: Optional[ThreadSummary]) -> BaseResponse:
    return BaseResponse(
        name="thank-you",
        greeting="You are very welcome",
        acknowledgment="I am glad I could help",
        action="Please let me know if you need anything else",
        closing="Best regards",
    )


def generic_response(context: Optional[ThreadSummary]) -> BaseResponse:
    return BaseResponse(
        name="generic",
        greeting="Thank you for your message",
        acknowledgment="I have reviewed your email",
        action="I will follow up as appropriate",
        closing="Best regards",
    )


# Subject keywords -> template, checked in order; generic is the fallback.
TEMPLATE_TABLE: Tuple[Tuple[Tuple[str, ...], Callable[[Optional[ThreadSummary]], BaseResponse]], ...] = (
    (("meeting", "schedule"), meeting_response),
    (("follow", "update"), follow_up_response),
    (("thank",), thank_you_response),
)


def select_template(subject: str, context: Optional[ThreadSummary] = None) -> BaseResponse:
    for words, build in TEMPLATE_TABLE:
        if contains_any(subject, words):
            return build(context)
    return generic_response(context)
