"""OpenAI-compatible chat completion client."""

from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from currentaffairs.utils.exceptions import AIServiceError
from currentaffairs.utils.logging import get_logger

logger = get_logger(__name__)


# OpenAI Pricing (as of 2026-01-04)
# https://openai.com/api/pricing/
PRICING = {
    "gpt-4o-mini": {
        "input": 0.150 / 1_000_000,
        "output": 0.600 / 1_000_000,
    },
    "gpt-4o": {
        "input": 2.50 / 1_000_000,
        "output": 10.00 / 1_000_000,
    },
}


class OpenAIClient:
    """Wrapper for the OpenAI chat API.

    ``base_url`` points the client at any OpenAI-compatible endpoint
    (DeepSeek, a local gateway). Retries are disabled; a failed call is
    reported immediately so the caller can fall back.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self.default_model = default_model

        logger.info("openai_client_initialized", model=default_model, base_url=base_url)

    async def create_completion(
        self,
        messages: List[Dict[str, str]],
        request_type: str,
        model: Optional[str] = None,
        json_output: bool = False,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Create a chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            request_type: Type of request, for logging.
            model: Model to use (defaults to default_model).
            json_output: Request ``json_object`` response format.
            temperature: Sampling temperature (0.0-2.0).
            max_tokens: Maximum tokens in response.

        Returns:
            Dict with 'content' (reply text) and 'usage' keys.

        Raises:
            AIServiceError: If API call fails or the reply is empty.
        """
        model = model or self.default_model

        logger.debug("openai_request", model=model, request_type=request_type)

        params: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens:
            params["max_tokens"] = max_tokens
        if json_output:
            params["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**params)
        except OpenAIError as e:
            logger.warning("openai_request_failed", model=model, error=str(e)[:200])
            raise AIServiceError(f"OpenAI API call failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise AIServiceError("Empty response from OpenAI API")

        usage = response.usage
        input_tokens = usage.prompt_tokens if usage else 0
        output_tokens = usage.completion_tokens if usage else 0
        cost = self._calculate_cost(model, input_tokens, output_tokens)

        logger.debug(
            "openai_response_success",
            model=model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost=cost,
        )

        return {
            "content": response.choices[0].message.content,
            "usage": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_tokens": input_tokens + output_tokens,
                "cost": cost,
            },
        }

    def _calculate_cost(self, model: str, input_tokens: int, output_tokens: int) -> float:
        """Calculate cost of API call in USD; unknown models priced as mini."""
        pricing = PRICING.get(model, PRICING["gpt-4o-mini"])
        cost = (input_tokens * pricing["input"]) + (output_tokens * pricing["output"])
        return round(cost, 8)
