"""Google Gemini API client with cost logging."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

from google import genai

from currentaffairs.utils.exceptions import AIServiceError
from currentaffairs.utils.logging import get_logger

logger = get_logger(__name__)

# Gemini Pricing (January 2025)
# https://ai.google.dev/gemini-api/docs/pricing
GEMINI_PRICING = {
    "gemini-2.0-flash": {
        "input": 0.10 / 1_000_000,
        "output": 0.40 / 1_000_000,
    },
    "gemini-2.0-flash-lite": {
        "input": 0.075 / 1_000_000,
        "output": 0.30 / 1_000_000,
    },
    "gemini-1.5-flash": {
        "input": 0.075 / 1_000_000,
        "output": 0.30 / 1_000_000,
    },
}


class GeminiClient:
    """Google Gemini text-classification client.

    One attempt per call; callers own timeouts and fallbacks.
    """

    def __init__(
        self,
        api_key: str,
        default_model: str = "gemini-2.0-flash",
        client: Optional[Any] = None,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Google API key.
            default_model: Default model to use.
            client: Pre-built ``genai.Client`` (tests inject a fake).
        """
        self.client = client or genai.Client(api_key=api_key)
        self.default_model = default_model

        logger.info("gemini_client_initialized", model=default_model)

    async def create_completion(
        self,
        messages: List[Dict[str, str]],
        request_type: str,
        model: Optional[str] = None,
        json_output: bool = False,
        temperature: float = 0.0,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Create completion with Gemini.

        Converts OpenAI-style messages to Gemini format for compatibility.

        Args:
            messages: List of message dicts with 'role' and 'content'.
            request_type: Type of request, for logging.
            model: Model to use (defaults to default_model).
            json_output: Ask for an ``application/json`` reply.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens in response.

        Returns:
            Dict with 'content' (reply text) and 'usage' keys.

        Raises:
            AIServiceError: If API call fails or the reply is empty.
        """
        model_name = model or self.default_model

        logger.debug("gemini_request", model=model_name, request_type=request_type)

        system_instruction, user_content = self._convert_messages(messages)

        config_dict: Dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_tokens or 1024,
        }
        if json_output:
            config_dict["response_mime_type"] = "application/json"
        if system_instruction:
            config_dict["system_instruction"] = system_instruction

        contents = [{"role": "user", "parts": [{"text": user_content}]}]

        try:
            # The SDK call is blocking; keep the event loop free
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=model_name,
                contents=contents,
                config=config_dict,
            )
        except Exception as e:
            logger.warning("gemini_request_failed", model=model_name, error=str(e)[:200])
            raise AIServiceError(f"Gemini API call failed: {e}") from e

        if not response.text:
            raise AIServiceError("Empty response from Gemini API")

        usage = response.usage_metadata
        input_tokens = getattr(usage, "prompt_token_count", 0) or 0
        output_tokens = getattr(usage, "candidates_token_count", 0) or 0
        cost = self._calculate_cost(model_name, input_tokens, output_tokens)

        logger.debug(
            "gemini_response_success",
            model=model_name,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            cost=cost,
        )

        return {
            "content": response.text,
            "usage": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "total_tokens": input_tokens + output_tokens,
                "cost": cost,
            },
        }

    def _convert_messages(self, messages: List[Dict[str, str]]) -> Tuple[Optional[str], str]:
        """Split OpenAI-style messages into (system_instruction, user_content)."""
        system_instruction = None
        user_parts = []

        for msg in messages:
            if msg["role"] == "system":
                system_instruction = msg["content"]
            elif msg["role"] == "user":
                user_parts.append(msg["content"])

        return system_instruction, "\n\n".join(user_parts)

    def _calculate_cost(self, model: str, input_tokens: int, output_tokens: int) -> float:
        pricing = GEMINI_PRICING.get(model, GEMINI_PRICING["gemini-2.0-flash"])
        cost = (input_tokens * pricing["input"]) + (output_tokens * pricing["output"])
        return round(cost, 8)
