"""Item classification."""

from currentaffairs.pipeline.classifiers.classifier import TwoTierClassifier
from currentaffairs.pipeline.classifiers.response_parser import (
    ClassificationResponse,
    first_json_object,
    parse_classification,
)
from currentaffairs.pipeline.classifiers.rule_based import RuleBasedClassifier

__all__ = [
    "ClassificationResponse",
    "RuleBasedClassifier",
    "TwoTierClassifier",
    "first_json_object",
    "parse_classification",
]
