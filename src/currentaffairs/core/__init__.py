"""Core domain models and configurations."""

from currentaffairs.core.article import (
    Article,
    ArticleDetail,
    ArticlesResponse,
    Classification,
    DateRange,
    PageExtraction,
    RawItem,
    TopicOfDay,
)
from currentaffairs.core.config import (
    CategoryRule,
    ClassifierRules,
    Config,
    PromptConfig,
    SourceConfig,
)
from currentaffairs.core.enums import (
    ClassificationState,
    ClassificationTier,
    Degradation,
    LLMProvider,
    Relevance,
    SourceKind,
    SourcePriority,
)

__all__ = [
    # Article models
    "Article",
    "ArticleDetail",
    "ArticlesResponse",
    "Classification",
    "DateRange",
    "PageExtraction",
    "RawItem",
    "TopicOfDay",
    # Configuration models
    "CategoryRule",
    "ClassifierRules",
    "Config",
    "PromptConfig",
    "SourceConfig",
    # Enums
    "ClassificationState",
    "ClassificationTier",
    "Degradation",
    "LLMProvider",
    "Relevance",
    "SourceKind",
    "SourcePriority",
]
