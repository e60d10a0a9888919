"""Enums for CurrentAffairs."""

from enum import Enum


class SourceKind(str, Enum):
    """How a source is read."""

    RSS = "rss"
    SCRAPE = "scrape"


class SourcePriority(str, Enum):
    """Operator-assigned source priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Relevance(str, Enum):
    """Exam-syllabus relevance tier of an article."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ClassificationTier(str, Enum):
    """Which classifier produced a result."""

    MODEL = "model"
    RULES = "rules"


class ClassificationState(str, Enum):
    """Per-item classifier progress.

    PENDING -> TIER1_ATTEMPTED -> CLASSIFIED, or PENDING -> CLASSIFIED
    when no model capability is configured.
    """

    PENDING = "pending"
    TIER1_ATTEMPTED = "tier1_attempted"
    CLASSIFIED = "classified"


class LLMProvider(str, Enum):
    """Available model-assisted classification providers."""

    GEMINI = "gemini"
    OPENAI = "openai"
    NONE = "none"


class Degradation(str, Enum):
    """Non-fatal conditions recorded during a pipeline run."""

    SOURCE_UNAVAILABLE = "source_unavailable"
    EXTRACTION_EMPTY = "extraction_empty"
    CLASSIFICATION_DEGRADED = "classification_degraded"
    PIPELINE_EMPTY = "pipeline_empty"
    DEADLINE_EXCEEDED = "deadline_exceeded"
