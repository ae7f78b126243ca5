"""
Input Validators - Shape checks for the chat request body.

The body is read by hand (not through a FastAPI body parameter) so that
configuration checks run first; these helpers turn the raw JSON into a
validated ChatRequest or a ValidationError.
"""
import json
from typing import Any, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ValidationError
from src.core.logging_config import get_logger
from src.models.chat import ChatRequest

logger = get_logger(__name__)

MISSING_MESSAGES = "Missing messages payload"


def parse_json_body(raw: bytes) -> Any:
    """
    Decode a request body as JSON.

    Raises:
        ValidationError: If the body is empty or not valid JSON
    """
    if not raw or not raw.strip():
        raise ValidationError(MISSING_MESSAGES, field="messages")
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValidationError(f"Request body is not valid JSON: {e}") from e


def validate_messages(messages: Any) -> Tuple[bool, Optional[str]]:
    """
    Check the messages field is a non-empty list.

    Args:
        messages: Raw value of the ``messages`` key (may be missing/None)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(messages, list) or len(messages) == 0:
        return False, MISSING_MESSAGES
    return True, None


def _describe(error: PydanticValidationError) -> Tuple[str, Optional[str]]:
    """First pydantic error as (message, dotted field path)."""
    first = error.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or None
    return first.get("msg", "Invalid request body"), field


def validate_chat_payload(payload: Any) -> ChatRequest:
    """
    Full validation of a decoded chat request body.

    Args:
        payload: Decoded JSON body

    Returns:
        Validated ChatRequest

    Raises:
        ValidationError: If the body is not an object, the message list is
            missing/empty, or any field has the wrong shape
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    is_valid, error = validate_messages(payload.get("messages"))
    if not is_valid:
        raise ValidationError(error, field="messages")

    try:
        return ChatRequest.model_validate(payload)
    except PydanticValidationError as e:
        message, field = _describe(e)
        logger.warning(f"Rejected chat payload: {field}: {message}")
        raise ValidationError(message, field=field) from e
