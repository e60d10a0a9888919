"""Strict parsing of model replies into ``Classification``s.

A reply is free text expected to contain one JSON object. The first
well-formed object is decoded and validated; anything else raises
``ResponseParseError`` so the caller can fall back to the rule tier.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from currentaffairs.core.article import Classification
from currentaffairs.core.enums import ClassificationTier, Relevance
from currentaffairs.utils.exceptions import ResponseParseError
from currentaffairs.utils.text_utils import truncate_words

MAX_TOPICS = 5
MAX_TAGS = 5
MAX_SUMMARY_WORDS = 150


class ClassificationResponse(BaseModel):
    """Structured response expected from the classification model."""

    model_config = ConfigDict(extra="ignore")

    relevance: Relevance = Field(
        ..., validation_alias=AliasChoices("relevance", "upscRelevance", "upsc_relevance")
    )
    syllabus_topics: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("syllabusTopics", "syllabus_topics", "topics"),
    )
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    summary: Optional[str] = None

    @field_validator("relevance", mode="before")
    @classmethod
    def _normalize_relevance(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("syllabus_topics", "tags", mode="before")
    @classmethod
    def _string_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(item).strip() for item in value if str(item).strip()]
        return value


def first_json_object(text: str) -> Dict[str, Any]:
    """Decode the first well-formed JSON object embedded in ``text``.

    Tries every ``{`` in turn, so prose or code fences around the object
    (and stray braces before it) are tolerated.

    Raises:
        ResponseParseError: If no JSON object can be decoded
    """
    decoder = json.JSONDecoder()
    start = text.find("{")

    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)

    raise ResponseParseError("No JSON object found in model response")


def parse_classification(
    text: str,
    taxonomy: List[str],
    source_category: str,
    fallback_summary: str,
) -> Classification:
    """Turn a model reply into a validated ``Classification``.

    Topics outside ``taxonomy`` are dropped (matching is case-insensitive,
    canonical spelling kept) and at most 5 remain; tags are capped at 5 and
    the summary at 150 words. A missing category falls back to the source
    category, a missing summary to ``fallback_summary``.

    Raises:
        ResponseParseError: On undecodable or schema-invalid replies
    """
    data = first_json_object(text)

    try:
        response = ClassificationResponse.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(f"Model response failed validation: {e}") from e

    canonical = {topic.lower(): topic for topic in taxonomy}
    topics: List[str] = []
    for topic in response.syllabus_topics:
        match = canonical.get(topic.lower())
        if match and match not in topics:
            topics.append(match)

    tags: List[str] = []
    for tag in response.tags:
        if tag not in tags:
            tags.append(tag)

    category = (response.category or "").strip() or source_category
    summary = (response.summary or "").strip() or fallback_summary

    return Classification(
        relevance=response.relevance,
        syllabus_topics=topics[:MAX_TOPICS],
        tags=tags[:MAX_TAGS],
        category=category,
        summary=truncate_words(summary, MAX_SUMMARY_WORDS),
        tier=ClassificationTier.MODEL,
    )
