"""
Gateway client for the AI model gateway.

The gateway speaks the OpenAI chat-completions protocol and routes a
``provider/model`` id (e.g. ``openai/gpt-4o``, ``perplexity/sonar``) to the
underlying provider, so the stock ``openai`` SDK is pointed at it via
``base_url``.

It handles:
- API client initialization
- Opening streaming chat completions
- Wrapping SDK failures in LLMError
"""
from typing import Any, AsyncIterator, Dict, List, Optional

from openai import APIError, AsyncOpenAI

from src.core.config import Settings, get_settings
from src.core.exceptions import ConfigurationError, LLMError
from src.core.logging_config import get_logger

logger = get_logger(__name__)


class GatewayClient:
    """
    Async client for streaming chat completions through the gateway.

    Example:
        >>> client = GatewayClient()
        >>> stream = await client.stream_chat(
        ...     model="openai/gpt-4o",
        ...     messages=[{"role": "user", "content": "Hello"}],
        ... )
        >>> async for chunk in stream:
        ...     print(chunk.choices[0].delta.content)
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the underlying SDK client.

        Raises:
            ConfigurationError: If no gateway API key is configured
        """
        self.settings = settings or get_settings()

        if not self.settings.has_gateway_credentials():
            raise ConfigurationError()

        self._client = AsyncOpenAI(
            api_key=self.settings.ai_gateway_api_key,
            base_url=self.settings.ai_gateway_base_url,
            timeout=self.settings.request_timeout_seconds,
            max_retries=0,
        )

        logger.info(f"Gateway client initialized (base_url={self.settings.ai_gateway_base_url})")

    async def stream_chat(
        self,
        model: str,
        messages: List[Dict[str, Any]],
    ) -> AsyncIterator[Any]:
        """
        Open a streaming chat completion.

        Args:
            model: Gateway model id
            messages: OpenAI-style chat messages, system prompt included

        Returns:
            Async iterator of chat completion chunks

        Raises:
            LLMError: If the gateway rejects the request or is unreachable
        """
        logger.debug(f"Opening stream: model={model}, messages={len(messages)}")
        try:
            return await self._client.chat.completions.create(
                model=model,
                messages=messages,
                stream=True,
            )
        except APIError as e:
            logger.error(f"Gateway request failed ({model}): {e}")
            raise LLMError(str(e)) from e

    async def close(self) -> None:
        """Release the HTTP connection pool."""
        await self._client.close()
