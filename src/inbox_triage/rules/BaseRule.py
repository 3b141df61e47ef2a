from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from inbox_triage.models import Category, FeatureSet, SenderType
from inbox_triage.rules.core import RuleMatch


class BaseRule(ABC):
    """
    Base class for category rules.

    A rule looks only at the extracted FeatureSet, never at raw text, so the
    whole decision table stays in one place (rules.py) and can be read top to
    bottom by priority.
    """

    # Human-/debug-friendly unique name
    name: str = "base_rule"

    # Higher runs earlier; the first matching rule decides the category.
    priority: int = 0

    category: Category = Category.WORK

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, priority={self.priority})"

    # --- Helpers ---

    def has_keyword(self, features: FeatureSet, words: Sequence[str]) -> bool:
        """True if any extracted keyword equals one of words (exact token match)."""
        return any(k in words for k in features.keywords)

    def sender_is(self, features: FeatureSet, sender_type: SenderType) -> bool:
        return features.sender_type == sender_type

    def hit(self, reason: str) -> RuleMatch:
        return RuleMatch(matched=True, reason=reason)

    def miss(self) -> RuleMatch:
        return RuleMatch(matched=False)

    # --- Rule API ---

    @abstractmethod
    def match(self, features: FeatureSet) -> RuleMatch:
        raise NotImplementedError
