from __future__ import annotations

import re
from typing import Iterable, List

from inbox_triage.extractors.text import sentences_with, split_sentences

EMAIL_ADDRESS = re.compile(r"[\w.-]+@[\w.-]+\.\w+", flags=re.ASCII)
FULL_NAME = re.compile(r"\b([A-Z][a-z]+ [A-Z][a-z]+)\b", flags=re.ASCII)
DEADLINE = re.compile(
    r"\b(\d{1,2}/\d{1,2}/\d{2,4}|\d{1,2}-\d{1,2}-\d{2,4}|\w+day|\d{1,2}:\d{2}(?:\s?(?:AM|PM))?)\b",
    flags=re.IGNORECASE | re.ASCII,
)
DECISION_WORDS = ("decided", "agreed", "confirmed", "approved", "rejected", "declined")


def extract_participants(content: str) -> List[str]:
    """Address local parts first, then capitalized 'Firstname Lastname' pairs."""
    local_parts = [address.split("@", 1)[0] for address in EMAIL_ADDRESS.findall(content or "")]
    names = FULL_NAME.findall(content or "")
    return _unique(local_parts + names)


def extract_deadlines(content: str) -> List[str]:
    return DEADLINE.findall(content or "")


def extract_decisions(content: str) -> List[str]:
    return sentences_with(split_sentences(content), DECISION_WORDS)


def thread_context(content: str) -> str:
    participants = extract_participants(content)
    deadlines = extract_deadlines(content)
    decisions = extract_decisions(content)

    lines = [f"Participants: {', '.join(participants)}"]
    if deadlines:
        lines.append(f"Deadlines: {', '.join(deadlines)}")
    if decisions:
        lines.append(f"Key Decisions: {', '.join(decisions)}")
    return "\n".join(lines)


def _unique(values: Iterable[str]) -> List[str]:
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)
