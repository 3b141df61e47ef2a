from __future__ import annotations

from typing import List

from inbox_triage.extractors.text import sentences_with, split_sentences

ACTION_WORDS = ("need", "should", "must", "will", "please", "action", "task", "deliverable")
MAX_ACTION_ITEMS = 5


def extract_action_items(content: str, limit: int = MAX_ACTION_ITEMS) -> List[str]:
    """
    Heuristic todo extraction.
    Any sentence mentioning an obligation word counts; substring match, so
    "willing" or "needed" qualify too.
    """
    return sentences_with(split_sentences(content), ACTION_WORDS)[:limit]
