"""Business logic services."""

from currentaffairs.services.cache_service import CacheService
from currentaffairs.services.config_loader import (
    ConfigLoader,
    load_classifier_rules,
    load_prompt_config,
    load_sources_config,
    load_yaml,
)

__all__ = [
    "CacheService",
    "ConfigLoader",
    "load_yaml",
    "load_sources_config",
    "load_classifier_rules",
    "load_prompt_config",
]
