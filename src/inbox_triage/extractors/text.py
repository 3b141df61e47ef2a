from __future__ import annotations

import math
import re
from typing import List, Sequence

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def split_sentences(text: str) -> List[str]:
    # Pieces are returned unstripped; callers strip when they render.
    return [part for part in _SENTENCE_BOUNDARY.split(text or "") if part.strip()]


def contains_any(text: str | None, needles: Sequence[str]) -> bool:
    """True if any needle is a substring of text (case-insensitive)."""
    haystack = (text or "").lower()
    return any(n.lower() in haystack for n in needles)


def sentences_with(sentences: Sequence[str], needles: Sequence[str]) -> List[str]:
    return [s.strip() for s in sentences if contains_any(s, needles)]


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; ratios and scores round .5 up.
    return int(math.floor(value + 0.5))
