from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Category(str, Enum):
    WORK = "work"
    URGENT = "urgent"
    FOLLOW_UP = "follow-up"
    MEETINGS = "meetings"
    PROMOTIONS = "promotions"
    PERSONAL = "personal"
    SPAM = "spam"
    # Only produced when automatic categorization is switched off.
    UNCATEGORIZED = "uncategorized"


# Fixed order used for alternative suggestions.
CATEGORY_ORDER: Tuple[Category, ...] = (
    Category.WORK,
    Category.URGENT,
    Category.FOLLOW_UP,
    Category.MEETINGS,
    Category.PROMOTIONS,
    Category.PERSONAL,
    Category.SPAM,
)


class EmailStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    REPLIED = "replied"
    ARCHIVED = "archived"


class SenderType(str, Enum):
    AUTOMATED = "automated"
    SOCIAL = "social"
    PROMOTIONAL = "promotional"
    PERSONAL = "personal"
    PROFESSIONAL = "professional"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Recency(str, Enum):
    IMMEDIATE = "immediate"
    RECENT = "recent"
    OLD = "old"
    VERY_OLD = "very-old"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    SHORT = "short"
    DETAILED = "detailed"


class SummaryLength(str, Enum):
    ONE_LINE = "one-line"
    BULLETS = "bullets"
    FULL = "full"


@dataclass(frozen=True)
class Message:
    sender: str
    content: str
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class Email:
    email_id: str
    sender: str
    subject: str
    body: str
    # None when the store handed us a date we could not parse.
    timestamp: Optional[datetime]
    sender_name: str = ""
    category: Category = Category.UNCATEGORIZED
    status: EmailStatus = EmailStatus.UNREAD
    thread: Tuple[Message, ...] = ()
    attachments: int = 0


@dataclass(frozen=True)
class FeatureSet:
    urgency: int
    sentiment: Sentiment
    keywords: Tuple[str, ...]
    sender_type: SenderType
    recency: Recency
    thread_length: int


@dataclass(frozen=True)
class AlternativeCategory:
    category: Category
    confidence: float


@dataclass(frozen=True)
class CategoryResult:
    category: Category
    confidence: int
    manual_review: bool
    reasoning: str
    alternatives: Tuple[AlternativeCategory, ...] = ()
    features: Optional[FeatureSet] = None


@dataclass(frozen=True)
class ThreadSummary:
    summary: str
    context: Optional[str]
    action_items: Tuple[str, ...]
    confidence: float
    compression_ratio: int
    participants: Tuple[str, ...] = ()
    deadlines: Tuple[str, ...] = ()
    key_points: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ToneAlternative:
    tone: Tone
    body: str
    confidence: float


@dataclass(frozen=True)
class ResponseDraft:
    body: str
    subject: str
    tone: Tone
    confidence: float
    template: str
    context: Optional[str] = None
    alternatives: Tuple[ToneAlternative, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class EmailAnalysis:
    email_id: str
    summary: ThreadSummary
    category: CategoryResult
    response: ResponseDraft
