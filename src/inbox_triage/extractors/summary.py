from __future__ import annotations

from typing import List, Sequence, Union

from inbox_triage.config.logging import get_logger
from inbox_triage.extractors.context import extract_deadlines, extract_participants, thread_context
from inbox_triage.extractors.text import contains_any, round_half_up, sentences_with, split_sentences
from inbox_triage.extractors.todos import extract_action_items
from inbox_triage.models import Email, SummaryLength, ThreadSummary
from inbox_triage.pipeline.context import NoiseSource

logger = get_logger(__name__)

NO_CONTENT = "No content available"
NO_DECISION = "No clear decision found."
KEY_POINT_WORDS = (
    "decision",
    "agree",
    "confirm",
    "schedule",
    "deadline",
    "budget",
    "approval",
    "meeting",
    "action",
    "follow-up",
)
MAIN_DECISION_WORDS = ("decided", "agreed", "confirm")
FALLBACK_KEY_POINTS = 3
MAX_BULLETS = 5
CONFIDENCE_RANGE = (70.0, 100.0)


def compress_thread(
    content: str,
    *,
    noise: NoiseSource,
    summary_length: Union[SummaryLength, str] = SummaryLength.BULLETS,
    preserve_context: bool = True,
    extract_actions: bool = True,
) -> ThreadSummary:
    """
    Compress a thread into a summary with optional context and action items.

    Only `confidence` is random; everything else, including the compression
    ratio, is a pure function of `content` and the options.
    """
    if not content or not content.strip():
        return ThreadSummary(
            summary=NO_CONTENT,
            context=None,
            action_items=(),
            confidence=CONFIDENCE_RANGE[0],
            compression_ratio=0,
        )

    sentences = split_sentences(content)
    summary = render_summary(sentences, summary_length)
    low, high = CONFIDENCE_RANGE

    return ThreadSummary(
        summary=summary,
        context=thread_context(content) if preserve_context else None,
        action_items=tuple(extract_action_items(content)) if extract_actions else (),
        confidence=noise.uniform(low, high),
        compression_ratio=compression_ratio(content, summary),
        participants=tuple(extract_participants(content)),
        deadlines=tuple(extract_deadlines(content)),
        key_points=tuple(key_points(sentences)),
    )


def render_summary(sentences: Sequence[str], length: Union[SummaryLength, str]) -> str:
    try:
        mode = SummaryLength(length)
    except ValueError:
        logger.warning("unknown summary length %r, using bullets", length)
        mode = SummaryLength.BULLETS

    points = key_points(sentences)

    if mode == SummaryLength.ONE_LINE:
        return f"Thread discusses: {', '.join(points)}. {main_decision(sentences)}"

    if mode == SummaryLength.FULL:
        joined = " ".join(sentences)
        block = "\n".join(points)
        items = "\n".join(f"• {item}" for item in extract_action_items(joined))
        return (
            f"Summary:\n{block}\n\n"
            f"Context:\n{thread_context(joined)}\n\n"
            f"Action Items:\n{items}"
        )

    return "• " + "\n• ".join(points[:MAX_BULLETS])


def key_points(sentences: Sequence[str]) -> List[str]:
    points = sentences_with(sentences, KEY_POINT_WORDS)
    if points:
        return points
    return [s.strip() for s in sentences[:FALLBACK_KEY_POINTS]]


def main_decision(sentences: Sequence[str]) -> str:
    for sentence in sentences:
        if contains_any(sentence, MAIN_DECISION_WORDS):
            return sentence.strip()
    return NO_DECISION


def compression_ratio(original: str, summary: str) -> int:
    if not original:
        return 0
    return round_half_up((len(original) - len(summary)) / len(original) * 100)


def summarize_content(content: str) -> str:
    """
    One-sentence preview used in inbox listings, e.g. "Hello (1 words)".
    The word count is over single-space separated pieces of the raw text.
    """
    sentences = split_sentences(content)
    if not sentences:
        return NO_CONTENT

    first = sentences[0].strip()
    more = "..." if len(sentences) > 1 else ""
    word_count = len(content.split(" "))
    return f"{first}{more} ({word_count} words)"


def thread_text(email: Email) -> str:
    """Thread messages oldest first, followed by the email body."""
    parts = [message.content for message in email.thread]
    parts.append(email.body or "")
    return " ".join(parts)
