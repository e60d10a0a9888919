"""Two-tier item classifier.

Tier 1 asks the configured language model; Tier 2 is the keyword
classifier. Any Tier 1 failure (missing client, error, timeout, bad reply)
falls through to Tier 2 for that item only, with no retry.
"""

import asyncio
from typing import Optional

from currentaffairs.core.article import Classification
from currentaffairs.core.config import ClassifierRules, PromptConfig
from currentaffairs.core.enums import ClassificationState, Degradation
from currentaffairs.integrations.provider_factory import LLMClient
from currentaffairs.pipeline.classifiers.response_parser import parse_classification
from currentaffairs.pipeline.classifiers.rule_based import RuleBasedClassifier
from currentaffairs.services.cache_service import CacheService
from currentaffairs.utils.exceptions import CurrentAffairsError
from currentaffairs.utils.logging import get_logger

logger = get_logger(__name__)


class TwoTierClassifier:
    """Classify items with the model when possible, keywords otherwise."""

    def __init__(
        self,
        rules: ClassifierRules,
        prompt: PromptConfig,
        client: Optional[LLMClient] = None,
        cache_service: Optional[CacheService] = None,
        timeout_sec: float = 15.0,
    ):
        """Initialize classifier.

        Args:
            rules: Keyword data for Tier 2 (and the topic taxonomy)
            prompt: Tier 1 prompt configuration
            client: Model client; None disables Tier 1
            cache_service: Optional cache for results keyed by content and source category
            timeout_sec: Hard ceiling on one Tier 1 call
        """
        self.rules = rules
        self.prompt = prompt
        self.client = client
        self.cache_service = cache_service
        self.timeout_sec = timeout_sec
        self.rule_classifier = RuleBasedClassifier(rules)

        logger.info(
            "classifier_initialized",
            tier1_enabled=client is not None,
            caching_enabled=cache_service is not None,
            timeout_sec=timeout_sec,
        )

    async def classify(self, title: str, body: str, source_category: str) -> Classification:
        """Classify one item. Never raises for Tier 1 problems.

        Args:
            title: Item title
            body: Item body text
            source_category: Category of the source the item came from

        Returns:
            Classification from Tier 1, or Tier 2 on any degradation
        """
        if self.cache_service:
            cached = self.cache_service.get_cached_classification(title, body, source_category)
            if cached is not None:
                return cached

        state = ClassificationState.PENDING
        result: Optional[Classification] = None

        if self.client is not None:
            state = ClassificationState.TIER1_ATTEMPTED
            result = await self._classify_with_model(title, body, source_category)

        if result is None:
            result = self.rule_classifier.classify(title, body, source_category)

        state = ClassificationState.CLASSIFIED
        logger.debug(
            "item_classified",
            title=title[:50],
            tier=result.tier.value,
            relevance=result.relevance.value,
            state=state.value,
        )

        if self.cache_service:
            self.cache_service.cache_classification(title, body, result, source_category)

        return result

    async def _classify_with_model(
        self, title: str, body: str, source_category: str
    ) -> Optional[Classification]:
        """Tier 1 attempt. Returns None on any failure."""
        user_prompt = self.prompt.user_prompt_template.format(
            title=title,
            body=body,
            taxonomy=", ".join(self.rules.taxonomy),
        )
        messages = [
            {"role": "system", "content": self.prompt.system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        try:
            response = await asyncio.wait_for(
                self.client.create_completion(
                    messages=messages,
                    request_type="classification",
                    json_output=True,
                    temperature=0.0,
                ),
                timeout=self.timeout_sec,
            )
            return parse_classification(
                str(response["content"]),
                taxonomy=self.rules.taxonomy,
                source_category=source_category,
                fallback_summary=body[: self.rules.summary_length] + "...",
            )
        except asyncio.TimeoutError:
            reason = "timeout"
        except CurrentAffairsError as e:
            reason = str(e)[:200]
        except (KeyError, TypeError) as e:
            reason = f"malformed client response: {e}"
        except Exception as e:
            reason = repr(e)[:200]

        logger.info(
            Degradation.CLASSIFICATION_DEGRADED.value,
            title=title[:50],
            reason=reason,
        )
        return None
