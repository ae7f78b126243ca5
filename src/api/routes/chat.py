"""
Chat Routes - the streaming chat endpoint.

POST /api/chat takes ``{messages, model?, webSearch?}`` and streams the
assistant reply back as a UI message stream (server-sent events).

The gateway credential is checked before the body is read, so a server
without a key answers 500 whatever the client sends.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from src.core.config import get_settings
from src.core.logging_config import get_logger
from src.core.validators import parse_json_body, validate_chat_payload
from src.llm.client import GatewayClient
from src.models.chat import ErrorResponse
from src.services.chat_service import ChatService, select_model
from src.services.ui_stream import UI_STREAM_HEADERS

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/chat",
    tags=["Chat"],
    responses={
        400: {"model": ErrorResponse, "description": "Malformed or empty message list"},
        500: {"model": ErrorResponse, "description": "Gateway credential not configured"}
    }
)

# Built on the first request that finds a credential
_chat_service: ChatService | None = None


async def get_chat_service() -> ChatService:
    """
    Get or create the chat service instance.

    Async so the check-and-set runs on the event loop rather than the
    threadpool, and concurrent first requests share one client.

    Raises:
        ConfigurationError: If the gateway API key is not configured
    """
    global _chat_service
    if _chat_service is None:
        settings = get_settings()
        _chat_service = ChatService(GatewayClient(settings), settings)
    return _chat_service


async def close_chat_service() -> None:
    """Close the gateway client, if one was created."""
    global _chat_service
    if _chat_service is not None:
        await _chat_service.client.close()
        _chat_service = None


@router.post(
    "",
    response_class=StreamingResponse,
    summary="Stream an assistant reply",
    description="""
    Send the conversation and receive the assistant reply as a stream.

    **Body:** `{ "messages": UIMessage[], "model"?: string, "webSearch"?: boolean }`

    **Model selection:**
    - `webSearch=true`: the search-capable model, even if `model` is set
    - otherwise `model`, or the default model when omitted

    **Response:** `text/event-stream` of UI message stream events
    (`text-delta`, `reasoning-delta`, `source-url`, ...) ending with
    `data: [DONE]`.
    """,
)
async def chat(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Validate the request, pick the model and relay the gateway stream."""
    payload = parse_json_body(await request.body())
    chat_request = validate_chat_payload(payload)

    web_search = bool(chat_request.web_search)
    model = select_model(chat_request.model, web_search, chat_service.settings)

    logger.info(
        f"Chat request: model={model}, web_search={web_search}, "
        f"messages={len(chat_request.messages)}"
    )

    return StreamingResponse(
        chat_service.stream_response(chat_request.messages, model),
        media_type="text/event-stream",
        headers=UI_STREAM_HEADERS,
    )
