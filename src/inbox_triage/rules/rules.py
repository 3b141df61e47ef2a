from __future__ import annotations

from typing import List

from inbox_triage.models import Category, FeatureSet, SenderType
from inbox_triage.rules.BaseRule import BaseRule
from inbox_triage.rules.core import RuleMatch

URGENCY_THRESHOLD = 7


class UrgentRule(BaseRule):
    name = "urgent"
    priority = 70
    category = Category.URGENT

    def match(self, features: FeatureSet) -> RuleMatch:
        if features.urgency >= URGENCY_THRESHOLD:
            return self.hit(f"urgency {features.urgency} >= {URGENCY_THRESHOLD}")
        return self.miss()


class MeetingsRule(BaseRule):
    name = "meetings"
    priority = 60
    category = Category.MEETINGS
    KEYWORDS = ("meeting", "schedule", "calendar")

    def match(self, features: FeatureSet) -> RuleMatch:
        if self.has_keyword(features, self.KEYWORDS):
            return self.hit("meeting keyword")
        return self.miss()


class FollowUpRule(BaseRule):
    name = "follow_up"
    priority = 50
    category = Category.FOLLOW_UP
    KEYWORDS = ("follow", "reminder", "update")

    def match(self, features: FeatureSet) -> RuleMatch:
        if self.has_keyword(features, self.KEYWORDS):
            return self.hit("follow-up keyword")
        return self.miss()


class PromotionsRule(BaseRule):
    name = "promotions"
    priority = 40
    category = Category.PROMOTIONS
    KEYWORDS = ("offer", "discount", "sale")

    def match(self, features: FeatureSet) -> RuleMatch:
        if self.sender_is(features, SenderType.PROMOTIONAL):
            return self.hit("promotional sender")
        if self.has_keyword(features, self.KEYWORDS):
            return self.hit("promotional keyword")
        return self.miss()


class SocialRule(BaseRule):
    name = "social"
    priority = 30
    category = Category.PERSONAL

    def match(self, features: FeatureSet) -> RuleMatch:
        if self.sender_is(features, SenderType.SOCIAL):
            return self.hit("social network sender")
        return self.miss()


class AutomatedRule(BaseRule):
    name = "automated"
    priority = 20
    category = Category.SPAM

    def match(self, features: FeatureSet) -> RuleMatch:
        if self.sender_is(features, SenderType.AUTOMATED):
            return self.hit("automated sender")
        return self.miss()


class WorkRule(BaseRule):
    name = "work"
    priority = 0
    category = Category.WORK

    def match(self, features: FeatureSet) -> RuleMatch:
        return self.hit("no other rule matched")


def default_rules() -> List[BaseRule]:
    rules: List[BaseRule] = [
        UrgentRule(),
        MeetingsRule(),
        FollowUpRule(),
        PromotionsRule(),
        SocialRule(),
        AutomatedRule(),
        WorkRule(),
    ]
    # Higher priority rules win when multiple could match.
    return sorted(rules, key=lambda r: r.priority, reverse=True)
