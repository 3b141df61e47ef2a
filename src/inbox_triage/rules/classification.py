from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Sequence, Tuple

from inbox_triage.config.logging import get_logger
from inbox_triage.config.settings import TriageSettings
from inbox_triage.extractors.features import extract_features
from inbox_triage.models import (
    CATEGORY_ORDER,
    AlternativeCategory,
    Category,
    CategoryResult,
    Email,
    FeatureSet,
    SenderType,
)
from inbox_triage.pipeline.context import NoiseSource
from inbox_triage.rules.core import Rule
from inbox_triage.rules.rules import URGENCY_THRESHOLD, default_rules

logger = get_logger(__name__)

BASE_CONFIDENCE = 50
MAX_CONFIDENCE = 95
ALTERNATIVE_COUNT = 3
ALTERNATIVE_CONFIDENCE_RANGE = (20.0, 50.0)

REASONS: Dict[Category, str] = {
    Category.URGENT: "Contains urgent keywords and time-sensitive language",
    Category.FOLLOW_UP: "Indicates follow-up or reminder context",
    Category.MEETINGS: "Contains scheduling or meeting-related terms",
    Category.PROMOTIONS: "Appears to be promotional or marketing content",
    Category.PERSONAL: "Personal communication style detected",
    Category.SPAM: "Automated or bulk email characteristics",
    Category.WORK: "Professional communication context",
}
DISABLED_REASON = "Automatic categorization is disabled"


def categorize(
    email: Email,
    settings: TriageSettings,
    *,
    noise: NoiseSource,
    now: datetime,
    rules: Optional[Sequence[Rule]] = None,
) -> CategoryResult:
    """
    Assign one category using the prioritized rule table.
    Alternatives are the only randomized part and come from `noise`.
    """
    if not settings.auto_categorize:
        return CategoryResult(
            category=Category.UNCATEGORIZED,
            confidence=0,
            manual_review=True,
            reasoning=DISABLED_REASON,
        )

    features = extract_features(email, now=now)
    category, rule_reason = decide_category(features, rules)
    confidence = score_confidence(features, category)

    logger.debug(
        "categorized %s as %s (%s, confidence=%s)",
        email.email_id,
        category.value,
        rule_reason,
        confidence,
    )

    return CategoryResult(
        category=category,
        confidence=confidence,
        manual_review=confidence < settings.confidence_threshold,
        reasoning=REASONS.get(category, "Based on content analysis and patterns"),
        alternatives=alternative_categories(category, noise),
        features=features,
    )


def decide_category(
    features: FeatureSet, rules: Optional[Sequence[Rule]] = None
) -> Tuple[Category, str]:
    ordered = sorted(rules, key=lambda r: r.priority, reverse=True) if rules else default_rules()

    for rule in ordered:
        result = rule.match(features)
        if result.matched:
            return rule.category, f"{rule.name}: {result.reason}"

    return Category.WORK, "no rule matched"


def score_confidence(features: FeatureSet, category: Category) -> int:
    confidence = BASE_CONFIDENCE

    # Increase confidence based on clear indicators
    if features.urgency >= URGENCY_THRESHOLD and category == Category.URGENT:
        confidence += 30
    if features.sender_type == SenderType.PROMOTIONAL and category == Category.PROMOTIONS:
        confidence += 25
    if len(features.keywords) > 3:
        confidence += 10

    return max(0, min(confidence, MAX_CONFIDENCE))


def alternative_categories(
    current: Category, noise: NoiseSource
) -> Tuple[AlternativeCategory, ...]:
    low, high = ALTERNATIVE_CONFIDENCE_RANGE
    others = [c for c in CATEGORY_ORDER if c != current][:ALTERNATIVE_COUNT]
    return tuple(
        AlternativeCategory(category=c, confidence=noise.uniform(low, high)) for c in others
    )
