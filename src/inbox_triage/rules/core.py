from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from inbox_triage.models import Category, FeatureSet


@dataclass(frozen=True)
class RuleMatch:
    matched: bool
    reason: str = ""


class Rule(Protocol):
    name: str
    priority: int
    category: Category

    def match(self, features: FeatureSet) -> RuleMatch: ...
