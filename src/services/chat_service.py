"""
Chat Service - Business logic for streaming chat replies.

This service orchestrates one chat turn:
1. Picks the model (web search model, requested model, or default)
2. Converts UI messages to gateway messages and adds the system prompt
3. Opens a streaming completion through the gateway
4. Translates gateway chunks into UI message stream events

Routes stay thin: they validate the request and hand the generator
returned by stream_response() to a StreamingResponse.
"""
from typing import Any, AsyncIterator, Dict, Iterator, List, Optional, Tuple

from src.core.config import Settings, get_settings
from src.core.logging_config import get_logger
from src.llm.client import GatewayClient
from src.llm.converters import convert_to_model_messages
from src.models.chat import UIMessage
from src.services.ui_stream import DONE_EVENT, UIMessageStreamWriter, format_sse

logger = get_logger(__name__)

STREAM_ERROR_TEXT = "An error occurred."


def select_model(model: Optional[str], web_search: bool, settings: Optional[Settings] = None) -> str:
    """
    Pick the gateway model for a request.

    Web search always wins, even over an explicit model. An empty model
    string counts as absent.

    Args:
        model: Model id requested by the client
        web_search: Whether the client asked for web search
        settings: Settings to read the fixed model ids from

    Returns:
        Gateway model id
    """
    settings = settings or get_settings()
    if web_search:
        return settings.search_model
    return model or settings.default_model


def _get(obj: Any, key: str) -> Any:
    """Read a field from an SDK object or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _citations(chunk: Any, delta: Any) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Source urls carried by a chunk.

    Search models report them either as a top-level ``citations`` list of
    urls or as ``url_citation`` annotations on the delta.
    """
    for url in _get(chunk, "citations") or []:
        if isinstance(url, str):
            yield url, None
    for annotation in _get(delta, "annotations") or []:
        if _get(annotation, "type") != "url_citation":
            continue
        citation = _get(annotation, "url_citation")
        url = _get(citation, "url")
        if url:
            yield url, _get(citation, "title")


class ChatService:
    """
    Service for streaming chat replies from the gateway.

    Example:
        >>> service = ChatService(GatewayClient())
        >>> async for frame in service.stream_response(messages, "openai/gpt-4o"):
        ...     print(frame, end="")
        data: {"type":"start","messageId":"msg_..."}
        ...
        data: [DONE]
    """

    def __init__(self, client: GatewayClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()
        logger.info("ChatService initialized")

    def build_messages(self, messages: List[UIMessage]) -> List[Dict[str, Any]]:
        """Gateway messages for a conversation, system prompt first."""
        return [
            {"role": "system", "content": self.settings.system_prompt},
            *convert_to_model_messages(messages),
        ]

    async def stream_response(self, messages: List[UIMessage], model: str) -> AsyncIterator[str]:
        """
        Stream one assistant reply as UI message stream SSE frames.

        Gateway failures do not raise: they are logged and reported to the
        client as an ``error`` event, since the HTTP status has already been
        sent by the time the stream is running.

        Args:
            messages: Validated conversation
            model: Gateway model id (see select_model)

        Yields:
            SSE frames, ending with ``data: [DONE]``
        """
        writer = UIMessageStreamWriter()
        model_messages = self.build_messages(messages)

        logger.info(
            f"Streaming reply: model={model}, "
            f"messages={len(model_messages) - 1}, message_id={writer.message_id}"
        )

        for event in writer.start():
            yield format_sse(event)

        finish_reason: Optional[str] = None
        text_chars = 0

        try:
            stream = await self.client.stream_chat(model=model, messages=model_messages)

            async for chunk in stream:
                for url, title in _citations(chunk, None):
                    for event in writer.source(url, title):
                        yield format_sse(event)

                for choice in _get(chunk, "choices") or []:
                    delta = _get(choice, "delta")

                    reasoning = _get(delta, "reasoning") or _get(delta, "reasoning_content")
                    for event in writer.reasoning(reasoning or ""):
                        yield format_sse(event)

                    content = _get(delta, "content") or ""
                    text_chars += len(content)
                    for event in writer.text(content):
                        yield format_sse(event)

                    for url, title in _citations(None, delta):
                        for event in writer.source(url, title):
                            yield format_sse(event)

                    finish_reason = _get(choice, "finish_reason") or finish_reason

        except Exception as e:
            logger.exception(f"Gateway stream failed (model={model}): {e}")
            for event in writer.error(STREAM_ERROR_TEXT):
                yield format_sse(event)
            yield DONE_EVENT
            return

        for event in writer.finish(finish_reason):
            yield format_sse(event)
        yield DONE_EVENT

        logger.info(
            f"Reply streamed: message_id={writer.message_id}, "
            f"chars={text_chars}, finish_reason={finish_reason}"
        )
