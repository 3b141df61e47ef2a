from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from dateutil import parser as date_parser

from inbox_triage.config.logging import get_logger
from inbox_triage.errors import MalformedEmail
from inbox_triage.models import Category, Email, EmailStatus, Message

logger = get_logger(__name__)

# Canonical field -> accepted keys in store records, first present wins.
FIELD_ALIASES: Dict[str, Sequence[str]] = {
    "email_id": ("id", "email_id"),
    "sender": ("from", "sender", "from_email"),
    "sender_name": ("senderName", "sender_name"),
    "subject": ("subject",),
    "body": ("body", "content", "body_text"),
    "timestamp": ("date", "timestamp"),
    "category": ("category",),
    "status": ("status",),
    "thread": ("thread",),
    "attachments": ("attachments",),
}
REQUIRED_FIELDS = ("email_id", "sender", "subject", "body", "timestamp")


def _pick(record: Mapping[str, Any], field_name: str) -> Any:
    for key in FIELD_ALIASES[field_name]:
        if key in record:
            return record[key]
    return None


def _has(record: Mapping[str, Any], field_name: str) -> bool:
    return any(key in record for key in FIELD_ALIASES[field_name])


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse ISO-8601 strings (trailing 'Z' allowed), RFC 2822 Date headers and
    other formats dateutil understands, or epoch milliseconds.
    Returns None for anything unparseable; recency treats that as very-old.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = date_parser.parse(value)
            except (ValueError, OverflowError):
                logger.debug("unparseable timestamp %r", value)
                return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


def _category(value: Any) -> Category:
    if not value:
        return Category.UNCATEGORIZED
    # The older triage UI used "followup" and "info".
    legacy = {"followup": Category.FOLLOW_UP, "info": Category.WORK}
    key = str(value).strip().lower()
    if key in legacy:
        return legacy[key]
    try:
        return Category(key)
    except ValueError:
        logger.warning("unknown category %r, treating as uncategorized", value)
        return Category.UNCATEGORIZED


def _status(value: Any) -> EmailStatus:
    try:
        return EmailStatus(str(value or "unread").strip().lower())
    except ValueError:
        logger.warning("unknown status %r, treating as unread", value)
        return EmailStatus.UNREAD


def message_from_record(record: Mapping[str, Any]) -> Message:
    return Message(
        sender=str(_pick(record, "sender") or ""),
        content=str(_pick(record, "body") or ""),
        timestamp=parse_timestamp(_pick(record, "timestamp")),
    )


def email_from_record(record: Mapping[str, Any]) -> Email:
    """
    Normalize one email-store record into an Email.
    Raises MalformedEmail when a field the extractors rely on is absent.
    """
    if not isinstance(record, Mapping):
        raise MalformedEmail(f"email record must be a mapping, got {type(record).__name__}")

    for field_name in REQUIRED_FIELDS:
        if not _has(record, field_name) or _pick(record, field_name) is None:
            raise MalformedEmail(f"email record is missing {field_name!r}", field_name=field_name)

    email_id = str(_pick(record, "email_id")).strip()
    # Results, dashboard counts and the review queue are keyed by id.
    if not email_id:
        raise MalformedEmail("email record has an empty id", field_name="email_id")

    raw_thread = _pick(record, "thread") or []
    if not isinstance(raw_thread, list):
        raise MalformedEmail("thread must be a list of messages", field_name="thread")

    thread = [message_from_record(m) for m in raw_thread if isinstance(m, Mapping)]
    # Chronological order; unknown timestamps sort first and keep their relative order.
    thread.sort(key=lambda m: m.timestamp or datetime.min.replace(tzinfo=timezone.utc))

    try:
        attachments = int(_pick(record, "attachments") or 0)
    except (TypeError, ValueError):
        attachments = 0

    return Email(
        email_id=email_id,
        sender=str(_pick(record, "sender")),
        sender_name=str(_pick(record, "sender_name") or ""),
        subject=str(_pick(record, "subject")),
        body=str(_pick(record, "body")),
        timestamp=parse_timestamp(_pick(record, "timestamp")),
        category=_category(_pick(record, "category")),
        status=_status(_pick(record, "status")),
        thread=tuple(thread),
        attachments=attachments,
    )


def emails_from_records(records: Sequence[Mapping[str, Any]]) -> List[Email]:
    emails = [email_from_record(r) for r in records]
    seen: set[str] = set()
    for email in emails:
        if email.email_id in seen:
            raise MalformedEmail(f"duplicate email id {email.email_id!r}", field_name="email_id")
        seen.add(email.email_id)
    return emails
