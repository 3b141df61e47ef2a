from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, timezone
from typing import List, Optional, Pattern, Tuple

from inbox_triage.config.logging import get_logger
from inbox_triage.errors import MalformedEmail
from inbox_triage.models import Email, FeatureSet, Recency, SenderType, Sentiment

logger = get_logger(__name__)

URGENT_WORDS = ("urgent", "asap", "emergency", "critical", "deadline", "today", "immediately")
TIME_INDICATORS = re.compile(r"\d+:\d+|tomorrow|today|this week|deadline", flags=re.IGNORECASE)
MAX_URGENCY = 10

POSITIVE_WORDS = ("great", "excellent", "good", "happy", "pleased", "thank")
NEGATIVE_WORDS = ("urgent", "problem", "issue", "concern", "disappointed")

MAX_KEYWORDS = 10
_NON_LETTERS = re.compile(r"[^a-zA-Z]")

# First matching row wins.
SENDER_TYPE_TABLE: Tuple[Tuple[Pattern[str], SenderType], ...] = (
    (re.compile(r"noreply|no-reply"), SenderType.AUTOMATED),
    (re.compile(r"github|linkedin"), SenderType.SOCIAL),
    (re.compile(r"amazon|netflix"), SenderType.PROMOTIONAL),
    (re.compile(r"\b(hi|hello|greetings)\b"), SenderType.PERSONAL),
)

# Upper bounds in hours, checked in order.
RECENCY_BUCKETS: Tuple[Tuple[float, Recency], ...] = (
    (2, Recency.IMMEDIATE),
    (24, Recency.RECENT),
    (72, Recency.OLD),
)


def extract_features(email: Email, *, now: datetime) -> FeatureSet:
    for field_name in ("subject", "body", "sender"):
        if getattr(email, field_name, None) is None:
            raise MalformedEmail(
                f"email {email.email_id!r} has no {field_name}", field_name=field_name
            )

    content = f"{email.subject} {email.body}".lower()
    features = FeatureSet(
        urgency=urgency_score(content),
        sentiment=sentiment_of(content),
        keywords=tuple(extract_keywords(content)),
        sender_type=sender_type_of(email.sender),
        recency=recency_of(email.timestamp, now),
        thread_length=len(email.thread) + 1,
    )
    logger.debug("features for %s: %s", email.email_id, features)
    return features


def urgency_score(content: str) -> int:
    text = (content or "").lower()
    word_hits = sum(1 for word in URGENT_WORDS if word in text)
    time_hits = len(TIME_INDICATORS.findall(text))
    return max(0, min(word_hits + time_hits, MAX_URGENCY))


def sentiment_of(content: str) -> Sentiment:
    text = (content or "").lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in text)
    negative = sum(1 for word in NEGATIVE_WORDS if word in text)

    if positive > negative:
        return Sentiment.POSITIVE
    if negative > positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def extract_keywords(content: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """Most frequent words longer than three letters; ties keep first-seen order."""
    frequency: Counter[str] = Counter()
    for token in (content or "").split():
        if len(token) <= 3:
            continue
        word = _NON_LETTERS.sub("", token)
        if len(word) > 3:
            frequency[word] += 1

    # Counter preserves insertion order and sorted() is stable.
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _count in ranked[:limit]]


def sender_type_of(sender: str) -> SenderType:
    address = (sender or "").lower()
    for pattern, sender_type in SENDER_TYPE_TABLE:
        if pattern.search(address):
            return sender_type
    return SenderType.PROFESSIONAL


def recency_of(timestamp: Optional[datetime], now: datetime) -> Recency:
    hours = hours_since(timestamp, now)
    # An unknown timestamp matches no bucket and lands in very-old.
    if hours is None:
        return Recency.VERY_OLD

    for upper_bound, bucket in RECENCY_BUCKETS:
        if hours < upper_bound:
            return bucket
    return Recency.VERY_OLD


def hours_since(timestamp: Optional[datetime], now: datetime) -> Optional[float]:
    if timestamp is None:
        return None
    return (_as_utc(now) - _as_utc(timestamp)).total_seconds() / 3600


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes from the store are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
