import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from inbox_triage.app.run import run_once, write_report
from inbox_triage.config.logging import setup_logging
from inbox_triage.config.paths import REPORTS_DIR
from inbox_triage.config.settings import load_settings
from inbox_triage.errors import MalformedEmail
from inbox_triage.parsing.parser import emails_from_records
from inbox_triage.pipeline.context import AnalysisContext

SAMPLE_PATH = Path(__file__).resolve().parent / "sample_emails.json"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Triage a JSON file of email records once.")
    parser.add_argument("input", nargs="?", type=Path, default=SAMPLE_PATH, help="JSON list of email records")
    parser.add_argument("--seed", type=int, default=None, help="seed for confidence jitter")
    parser.add_argument("--no-report", action="store_true", help="do not write a JSON report")
    parser.add_argument("-v", "--verbose", action="store_true", help="print progress events")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    records = json.loads(args.input.read_text(encoding="utf-8"))
    if isinstance(records, dict):
        # Accept the store's {"data": [...]} envelope as well as a bare list.
        records = records.get("data") or []

    try:
        emails = emails_from_records(records)
    except MalformedEmail as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2

    settings = load_settings()
    if args.seed is not None:
        settings = replace(settings, seed=args.seed)
    ctx = AnalysisContext.from_settings(settings)

    def progress(step: str, event: dict) -> None:
        if args.verbose:
            print(f"[{step}] {event.get('detail')}")

    summary = run_once(emails, ctx, progress_cb=progress)

    for result in summary["results"]:
        flag = " (review)" if result["manual_review"] else ""
        print(f"{result['category']:<12} {result['confidence']:>3}%{flag}  {result['subject']}")
    print(
        f"Processed {summary['processed']} / {summary['emails_seen']} "
        f"(archived skipped: {summary['skipped_archived']}, errors: {summary['errors']})"
    )

    if not args.no_report:
        path = write_report(summary, REPORTS_DIR)
        print(f"Report written to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
