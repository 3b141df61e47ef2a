from __future__ import annotations

from datetime import datetime, timezone

import pytest

from inbox_triage.errors import MalformedEmail
from inbox_triage.extractors.features import recency_of
from inbox_triage.models import Category, EmailStatus, Recency
from inbox_triage.parsing.parser import email_from_record, emails_from_records, parse_timestamp


def _record(**overrides):
    record = {
        "id": 7,
        "from": "john.doe@company.com",
        "senderName": "John Doe",
        "subject": "Q3 Budget Review",
        "body": "Please review the attached budget.",
        "date": "2026-10-18T09:30:00Z",
        "category": "work",
        "status": "unread",
        "attachments": 2,
    }
    record.update(overrides)
    return record


def test_store_record_is_normalized() -> None:
    email = email_from_record(_record())

    assert email.email_id == "7"
    assert email.sender == "john.doe@company.com"
    assert email.sender_name == "John Doe"
    assert email.timestamp == datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
    assert email.category == Category.WORK
    assert email.status == EmailStatus.UNREAD
    assert email.attachments == 2
    assert email.thread == ()


def test_alternate_field_names() -> None:
    record = {
        "email_id": "x",
        "sender": "a@b.com",
        "subject": "s",
        "content": "c",
        "timestamp": 1_760_000_000_000,
    }
    email = email_from_record(record)
    assert email.body == "c"
    assert email.timestamp == datetime.fromtimestamp(1_760_000_000, tz=timezone.utc)


@pytest.mark.parametrize("missing", ["id", "from", "subject", "body", "date"])
def test_missing_required_field(missing: str) -> None:
    record = _record()
    del record[missing]
    with pytest.raises(MalformedEmail) as excinfo:
        email_from_record(record)
    assert excinfo.value.kind == "malformed-input"


def test_null_subject_is_malformed() -> None:
    with pytest.raises(MalformedEmail) as excinfo:
        email_from_record(_record(subject=None))
    assert excinfo.value.field_name == "subject"


def test_empty_strings_are_allowed() -> None:
    email = email_from_record(_record(subject="", body=""))
    assert email.subject == ""
    assert email.body == ""


def test_non_mapping_record() -> None:
    with pytest.raises(MalformedEmail):
        email_from_record(["not", "a", "record"])


def test_bad_date_becomes_none() -> None:
    assert email_from_record(_record(date="not a date")).timestamp is None


def test_thread_is_sorted_chronologically() -> None:
    thread = [
        {"from": "b@x.com", "body": "second", "date": "2026-10-17T10:00:00Z"},
        {"from": "a@x.com", "body": "first", "date": "2026-10-16T10:00:00Z"},
    ]
    email = email_from_record(_record(thread=thread))
    assert [m.content for m in email.thread] == ["first", "second"]


def test_thread_must_be_a_list() -> None:
    with pytest.raises(MalformedEmail) as excinfo:
        email_from_record(_record(thread="oops"))
    assert excinfo.value.field_name == "thread"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("followup", Category.FOLLOW_UP),
        ("info", Category.WORK),
        ("Meetings", Category.MEETINGS),
        ("gossip", Category.UNCATEGORIZED),
        (None, Category.UNCATEGORIZED),
    ],
)
def test_category_normalization(raw, expected: Category) -> None:
    assert email_from_record(_record(category=raw)).category == expected


def test_unknown_status_is_unread() -> None:
    assert email_from_record(_record(status="snoozed")).status == EmailStatus.UNREAD


def test_parse_timestamp_variants() -> None:
    assert parse_timestamp("2026-10-18T09:30:00+02:00").utcoffset().total_seconds() == 7200
    assert parse_timestamp("2026-10-18T09:30:00").tzinfo == timezone.utc
    assert parse_timestamp(datetime(2026, 1, 1)).tzinfo == timezone.utc
    assert parse_timestamp("") is None
    assert parse_timestamp(True) is None


def test_emails_from_records() -> None:
    emails = emails_from_records([_record(id=1), _record(id=2)])
    assert [e.email_id for e in emails] == ["1", "2"]


def test_rfc2822_date_header() -> None:
    parsed = parse_timestamp("Mon, 19 Oct 2026 11:30:00 +0000")
    assert parsed == datetime(2026, 10, 19, 11, 30, tzinfo=timezone.utc)


def test_rfc2822_date_keeps_recency() -> None:
    email = email_from_record(_record(date="Mon, 19 Oct 2026 11:30:00 +0000"))
    now = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
    assert recency_of(email.timestamp, now) == Recency.IMMEDIATE


def test_short_fractional_seconds() -> None:
    parsed = parse_timestamp("2026-10-19T11:30:00.5Z")
    assert parsed == datetime(2026, 10, 19, 11, 30, 0, 500000, tzinfo=timezone.utc)


@pytest.mark.parametrize("raw_id", ["", "   "])
def test_blank_id_is_malformed(raw_id: str) -> None:
    with pytest.raises(MalformedEmail) as excinfo:
        email_from_record(_record(id=raw_id))
    assert excinfo.value.field_name == "email_id"


def test_duplicate_ids_are_rejected() -> None:
    with pytest.raises(MalformedEmail) as excinfo:
        emails_from_records([_record(id=1), _record(id="1")])
    assert excinfo.value.field_name == "email_id"
