"""LLM provider factory for Tier 1 classification."""

from typing import Any, Dict, List, Optional, Protocol

from currentaffairs.core.config import Config
from currentaffairs.core.enums import LLMProvider
from currentaffairs.utils.logging import get_logger

logger = get_logger(__name__)


class LLMClient(Protocol):
    """Protocol for LLM clients - ensures consistent interface."""

    async def create_completion(
        self,
        messages: List[Dict[str, str]],
        request_type: str,
        model: Optional[str] = None,
        json_output: bool = False,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]: ...


class ProviderFactory:
    """Factory for the optional text-classification capability."""

    def __init__(self, config: Config):
        self.config = config
        self._clients: Dict[LLMProvider, LLMClient] = {}

    def get_classification_client(self) -> Optional[LLMClient]:
        """Get client for classification tasks.

        Returns:
            LLM client, or None when the provider is ``none`` or its
            credentials are missing (Tier 1 is then skipped).
        """
        provider = LLMProvider(self.config.classification_provider)

        if provider in self._clients:
            return self._clients[provider]

        client = self._create_client(provider)
        if client is None:
            logger.info("tier1_classifier_disabled", provider=provider.value)
            return None

        self._clients[provider] = client
        return client

    def _create_client(self, provider: LLMProvider) -> Optional[LLMClient]:
        if provider == LLMProvider.GEMINI:
            if not self.config.google_api_key:
                logger.warning("google_api_key_not_configured")
                return None

            from currentaffairs.integrations.gemini_client import GeminiClient

            return GeminiClient(
                api_key=self.config.google_api_key,
                default_model=self.config.gemini_model,
            )

        elif provider == LLMProvider.OPENAI:
            if not self.config.openai_api_key:
                logger.warning("openai_api_key_not_configured")
                return None

            from currentaffairs.integrations.openai_client import OpenAIClient

            return OpenAIClient(
                api_key=self.config.openai_api_key,
                default_model=self.config.openai_model,
                base_url=self.config.openai_base_url,
            )

        return None
