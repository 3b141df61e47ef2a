from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from inbox_triage.extractors.features import hours_since
from inbox_triage.extractors.text import round_half_up
from inbox_triage.models import Category, CategoryResult, Email, EmailStatus

# Estimated hours saved per triaged email.
HOURS_SAVED_PER_EMAIL = 0.15
DEFAULT_ACCURACY = 85


@dataclass(frozen=True)
class DashboardStats:
    total: int
    unread: int
    read: int
    replied: int
    archived: int
    urgent: int
    follow_up: int
    time_saved_hours: float
    accuracy: int

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _effective_category(email: Email, results: Mapping[str, CategoryResult]) -> Category:
    result = results.get(email.email_id)
    if result is not None and result.category != Category.UNCATEGORIZED:
        return result.category
    return email.category


def overall_accuracy(results: Sequence[CategoryResult]) -> int:
    """Mean confidence of auto-categorized results; 85 when there are none."""
    scored = [r.confidence for r in results if r.category != Category.UNCATEGORIZED]
    if not scored:
        return DEFAULT_ACCURACY
    return round_half_up(sum(scored) / len(scored))


def dashboard_stats(
    emails: Sequence[Email],
    results: Optional[Mapping[str, CategoryResult]] = None,
) -> DashboardStats:
    results = results or {}
    statuses = [e.status for e in emails]
    categories = [_effective_category(e, results) for e in emails]

    return DashboardStats(
        total=len(emails),
        unread=statuses.count(EmailStatus.UNREAD),
        read=statuses.count(EmailStatus.READ),
        replied=statuses.count(EmailStatus.REPLIED),
        archived=statuses.count(EmailStatus.ARCHIVED),
        urgent=categories.count(Category.URGENT),
        follow_up=categories.count(Category.FOLLOW_UP),
        time_saved_hours=round(len(emails) * HOURS_SAVED_PER_EMAIL, 2),
        accuracy=overall_accuracy(list(results.values())),
    )


def confidence_level(confidence: float) -> str:
    if confidence >= 80:
        return "high"
    if confidence >= 60:
        return "medium"
    return "low"


def time_ago(timestamp: Optional[datetime], now: datetime) -> str:
    hours = hours_since(timestamp, now)
    if hours is None:
        return "unknown"

    minutes = int(hours * 60)
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{int(hours)}h ago"
    return f"{int(hours // 24)}d ago"
