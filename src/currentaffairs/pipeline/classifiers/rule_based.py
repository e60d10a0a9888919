"""Deterministic keyword classifier (Tier 2).

Always available and a pure function of its input and the loaded rules:
no I/O, no clock, no randomness. Keyword presence is a case-insensitive
substring test against "title body", so "act" also matches "impact".
"""

from typing import List

from currentaffairs.core.article import Classification
from currentaffairs.core.config import ClassifierRules
from currentaffairs.core.enums import ClassificationTier, Relevance
from currentaffairs.utils.logging import get_logger

logger = get_logger(__name__)


class RuleBasedClassifier:
    """Keyword-count relevance, topic and category assignment."""

    def __init__(self, rules: ClassifierRules):
        self.rules = rules
        self._stop_words = frozenset(word.lower() for word in rules.stop_words)

    def classify(self, title: str, body: str, source_category: str) -> Classification:
        """Classify one item.

        Args:
            title: Item title
            body: Item body text
            source_category: Category used when no category rule matches

        Returns:
            Classification with ``tier=rules``
        """
        text = f"{title} {body}".lower()

        return Classification(
            relevance=self.relevance(text),
            syllabus_topics=self.syllabus_topics(text),
            tags=self.tags(text),
            category=self.category(text, source_category),
            summary=body[: self.rules.summary_length] + "...",
            tier=ClassificationTier.RULES,
        )

    def relevance(self, text: str) -> Relevance:
        """Relevance tier from high/medium keyword presence counts."""
        rules = self.rules
        high = _count_present(rules.high_relevance_keywords, text)
        medium = _count_present(rules.medium_relevance_keywords, text)

        if high >= rules.high_min_high or (
            high >= rules.high_min_mixed_high and medium >= rules.high_min_mixed_medium
        ):
            return Relevance.HIGH
        if high >= rules.medium_min_high or medium >= rules.medium_min_medium:
            return Relevance.MEDIUM
        return Relevance.LOW

    def syllabus_topics(self, text: str) -> List[str]:
        """Every taxonomy topic with at least one keyword present, in taxonomy order."""
        return [
            topic
            for topic, keywords in self.rules.syllabus_topics.items()
            if any(keyword.lower() in text for keyword in keywords)
        ]

    def tags(self, text: str) -> List[str]:
        """First distinct non-stop-words of sufficient length, in text order."""
        tags: List[str] = []
        for word in text.split():
            if len(word) < self.rules.min_tag_length or word in self._stop_words:
                continue
            if word in tags:
                continue
            tags.append(word)
            if len(tags) >= self.rules.max_tags:
                break
        return tags

    def category(self, text: str, source_category: str) -> str:
        """First category rule with a keyword present, else the source category."""
        for rule in self.rules.category_rules:
            if any(keyword.lower() in text for keyword in rule.keywords):
                return rule.category
        return source_category


def _count_present(keywords: List[str], text: str) -> int:
    return sum(1 for keyword in keywords if keyword.lower() in text)
