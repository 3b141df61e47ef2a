from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from inbox_triage.extractors.features import hours_since
from inbox_triage.models import Category, Email, EmailAnalysis

STALE_AFTER_HOURS = 24
LONG_THREAD = 3


@dataclass(frozen=True)
class Suggestion:
    kind: str
    title: str
    description: str
    category: Optional[Category] = None


def suggestions_from_analysis(
    email: Email, analysis: EmailAnalysis, *, now: datetime
) -> List[Suggestion]:
    # Policy layer decides what to surface based on analysis output.
    suggestions: List[Suggestion] = []
    result = analysis.category
    suggested = result.category

    if suggested not in (Category.UNCATEGORIZED, email.category):
        suggestions.append(
            Suggestion(
                kind="category",
                title="Category Suggestion",
                description=f"Consider moving this to {suggested.value}",
                category=suggested,
            )
        )

    if result.manual_review:
        suggestions.append(
            Suggestion(
                kind="manual_review",
                title="Needs Review",
                description=f"Categorization confidence {result.confidence}% is below your threshold",
            )
        )

    draft = analysis.response
    if draft.template != "generic":
        suggestions.append(
            Suggestion(
                kind="response",
                title="Response Template",
                description=f"{draft.template} reply in a {draft.tone.value} tone",
            )
        )

    age = hours_since(email.timestamp, now)
    is_urgent = Category.URGENT in (email.category, suggested)
    if is_urgent and age is not None and age > STALE_AFTER_HOURS:
        suggestions.append(
            Suggestion(
                kind="priority_alert",
                title="High Priority Alert",
                description=f"This urgent email is older than {STALE_AFTER_HOURS} hours",
            )
        )

    thread_length = len(email.thread) + 1
    if thread_length > LONG_THREAD:
        suggestions.append(
            Suggestion(
                kind="long_thread",
                title="Long Thread",
                description="Consider archiving or summarizing this long thread",
            )
        )

    return suggestions
