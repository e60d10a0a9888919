# tests/unit/test_rule_based_classifier.py
"""Unit tests for the keyword classifier."""

import pytest

from currentaffairs.core.enums import ClassificationTier, Relevance
from currentaffairs.pipeline.classifiers.rule_based import RuleBasedClassifier

REGRESSION_TEXT = (
    "The Parliament passed a constitutional amendment bill on trade policy "
    "and budget allocation"
)
RELEVANCE_ORDER = {Relevance.LOW: 0, Relevance.MEDIUM: 1, Relevance.HIGH: 2}


@pytest.fixture
def classifier(classifier_rules) -> RuleBasedClassifier:
    return RuleBasedClassifier(classifier_rules)


@pytest.mark.unit
class TestRegressionScenario:
    """The Parliament/trade/budget sentence must keep its classification."""

    def test_relevance_is_high(self, classifier):
        """Should rate the sentence as high relevance."""
        result = classifier.classify(REGRESSION_TEXT, "", "General")
        assert result.relevance == Relevance.HIGH

    def test_topics_include_polity_and_economics(self, classifier):
        """Should map the sentence to Polity and Economics."""
        result = classifier.classify(REGRESSION_TEXT, "", "General")
        assert "Polity" in result.syllabus_topics
        assert "Economics" in result.syllabus_topics

    def test_category_is_economics(self, classifier):
        """Should prefer Economics (trade/budget) over Polity (parliament)."""
        result = classifier.classify(REGRESSION_TEXT, "", "General")
        assert result.category == "Economics"

    def test_tags_are_first_distinct_words(self, classifier):
        """Should tag with the first five long non-stop-words."""
        result = classifier.classify(REGRESSION_TEXT, "", "General")
        assert result.tags == ["parliament", "passed", "constitutional", "amendment", "bill"]

    def test_tier_is_rules(self, classifier):
        result = classifier.classify(REGRESSION_TEXT, "", "General")
        assert result.tier == ClassificationTier.RULES


@pytest.mark.unit
class TestRelevance:
    """Tests for the relevance thresholds."""

    def test_no_keywords_is_low(self, classifier):
        """Should rate text without keywords as low."""
        assert classifier.relevance("cricket match ends in a draw") == Relevance.LOW

    def test_single_high_keyword_is_medium(self, classifier):
        """Should rate one high keyword alone as medium."""
        assert classifier.relevance("the election was held") == Relevance.MEDIUM

    def test_two_medium_keywords_are_medium(self, classifier):
        """Should rate two medium keywords as medium."""
        assert classifier.relevance("new technology for urban transport") == Relevance.MEDIUM

    def test_one_medium_keyword_is_low(self, classifier):
        assert classifier.relevance("a technology showcase") == Relevance.LOW

    def test_high_plus_medium_is_high(self, classifier):
        """Should rate one high plus one medium keyword as high."""
        assert classifier.relevance("election commission announces dates") == Relevance.HIGH

    def test_two_high_keywords_are_high(self, classifier):
        assert classifier.relevance("inflation and gdp figures") == Relevance.HIGH

    def test_substring_matching(self, classifier):
        """Should count keywords inside longer words ("act" in "impact")."""
        assert classifier.relevance("the impact was felt") == Relevance.MEDIUM

    def test_adding_keyword_never_lowers_relevance(self, classifier, classifier_rules):
        """Should be monotonic: appending any keyword never lowers the tier."""
        base_texts = [
            "cricket match ends in a draw",
            "a technology showcase",
            "the election was held",
            REGRESSION_TEXT.lower(),
        ]
        keywords = classifier_rules.high_relevance_keywords + classifier_rules.medium_relevance_keywords

        for text in base_texts:
            before = RELEVANCE_ORDER[classifier.relevance(text)]
            for keyword in keywords:
                after = RELEVANCE_ORDER[classifier.relevance(f"{text} {keyword}")]
                assert after >= before, (text, keyword)


@pytest.mark.unit
class TestTopicsTagsCategory:
    """Tests for topic, tag and category assignment."""

    def test_topics_follow_taxonomy_order(self, classifier, classifier_rules):
        """Should list topics in taxonomy order regardless of text order."""
        topics = classifier.syllabus_topics("satellite launch near the border after budget talks")
        taxonomy = classifier_rules.taxonomy
        assert topics == sorted(topics, key=taxonomy.index)
        assert {"Economics", "Science & Technology", "Defense"} <= set(topics)

    def test_tags_skip_stop_words_and_short_words(self, classifier):
        """Should drop stop-words and words of three letters or fewer."""
        tags = classifier.tags("this will have the new farm laws from them")
        assert tags == ["farm", "laws"]

    def test_tags_are_deduplicated(self, classifier):
        tags = classifier.tags("river river river delta river")
        assert tags == ["river", "delta"]

    def test_tags_never_exceed_five(self, classifier):
        """Should cap tags at five for long inputs."""
        text = " ".join(f"keyword{i}" for i in range(40))
        assert len(classifier.tags(text)) == 5

    def test_category_priority(self, classifier):
        """Should pick International Relations before Economics."""
        assert classifier.category("foreign trade deficit", "General") == "International Relations"

    def test_category_falls_back_to_source(self, classifier):
        """Should keep the source category when no rule matches."""
        assert classifier.category("a quiet day", "Editorial") == "Editorial"

    def test_summary_is_truncated_body_with_ellipsis(self, classifier):
        body = "x" * 450
        result = classifier.classify("Title", body, "General")
        assert result.summary == "x" * 200 + "..."

    def test_short_body_summary_still_has_ellipsis(self, classifier):
        result = classifier.classify("Title", "Short body", "General")
        assert result.summary == "Short body..."


@pytest.mark.unit
class TestDeterminism:
    """Tests for repeatability."""

    def test_same_input_same_output(self, classifier):
        """Should return equal results for repeated calls."""
        first = classifier.classify("Budget session", REGRESSION_TEXT, "National")
        second = classifier.classify("Budget session", REGRESSION_TEXT, "National")
        assert first == second

    def test_independent_instances_agree(self, classifier_rules):
        """Should not depend on instance state."""
        a = RuleBasedClassifier(classifier_rules).classify("Budget session", REGRESSION_TEXT, "National")
        b = RuleBasedClassifier(classifier_rules).classify("Budget session", REGRESSION_TEXT, "National")
        assert a == b
