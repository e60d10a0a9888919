"""External service integrations."""

from currentaffairs.integrations.provider_factory import LLMClient, ProviderFactory

__all__ = ["LLMClient", "ProviderFactory"]
