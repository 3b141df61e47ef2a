from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from conftest import NOW, make_email
from inbox_triage.app.run import result_record, run_once, write_report
from inbox_triage.errors import MalformedEmail
from inbox_triage.models import EmailStatus
from inbox_triage.parsing.parser import emails_from_records
from inbox_triage.pipeline.context import AnalysisContext
from inbox_triage.pipeline.orchestrator import analyze_email


def test_run_once_processes_oldest_first_and_skips_archived(ctx: AnalysisContext) -> None:
    emails = [
        make_email(email_id="new", subject="Meeting today", timestamp=NOW - timedelta(hours=1)),
        make_email(email_id="old", subject="Follow up", timestamp=NOW - timedelta(days=3)),
        make_email(email_id="done", status=EmailStatus.ARCHIVED),
    ]

    summary = run_once(emails, ctx)

    assert [r["email_id"] for r in summary["results"]] == ["old", "new"]
    assert summary["processed"] == 2
    assert summary["skipped_archived"] == 1
    assert summary["emails_seen"] == 2
    assert summary["errors"] == 0
    assert summary["categories"] == {"follow-up": 1, "meetings": 1}
    assert summary["dashboard"]["total"] == 3
    assert summary["dashboard"]["archived"] == 1
    assert summary["failures"] == []


def test_run_once_reports_progress_events(ctx: AnalysisContext) -> None:
    events: List[Tuple[str, Dict[str, Any]]] = []

    run_once([make_email()], ctx, progress_cb=lambda step, payload: events.append((step, payload)))

    steps = [step for step, _ in events]
    assert steps == ["processing", "result", "processing", "done"]
    assert events[-1][1]["metrics"]["processed"] == 1


def test_malformed_email_is_recorded_and_batch_continues(ctx: AnalysisContext) -> None:
    emails = [
        make_email(email_id="bad", body=None, timestamp=NOW - timedelta(days=1)),
        make_email(email_id="good"),
    ]

    summary = run_once(emails, ctx)

    assert summary["processed"] == 1
    assert summary["errors"] == 1
    assert summary["failures"][0]["email_id"] == "bad"
    assert summary["failures"][0]["kind"] == "malformed-input"


def test_result_record_is_json_ready(ctx: AnalysisContext) -> None:
    email = make_email(subject="Project update", body="We need the report by Friday. Thanks!")
    analysis = analyze_email(email, ctx)

    record = result_record(email, analysis, NOW)

    assert record["category"] == "follow-up"
    assert record["received"] == "1h ago"
    assert record["preview"] == "We need the report by Friday... (7 words)"
    assert record["action_items"] == ["We need the report by Friday"]
    assert {"kind": "response", "title": "Response Template"}.items() <= record["suggestions"][-1].items()
    json.dumps(record)


def test_write_report(tmp_path: Path) -> None:
    path = write_report({"processed": 0, "results": []}, tmp_path / "reports")

    assert path.parent == tmp_path / "reports"
    assert json.loads(path.read_text(encoding="utf-8")) == {"processed": 0, "results": []}


def test_records_without_ids_are_rejected_before_the_run() -> None:
    records = [
        {"from": "a@corp.com", "subject": "Urgent", "body": "asap", "date": "2026-10-19T10:00:00Z"},
        {"from": "b@corp.com", "subject": "Hi", "body": "hello", "date": "2026-10-19T11:00:00Z"},
    ]
    with pytest.raises(MalformedEmail) as excinfo:
        emails_from_records(records)
    assert excinfo.value.field_name == "email_id"


def test_dashboard_counts_each_email_once(ctx: AnalysisContext) -> None:
    emails = [
        make_email(
            email_id="a",
            subject="Urgent deadline today",
            body="Critical fix needed asap, immediately, before 10:00",
        ),
        make_email(email_id="b"),
    ]

    summary = run_once(emails, ctx)

    assert summary["categories"] == {"urgent": 1, "work": 1}
    assert summary["dashboard"]["urgent"] == 1
