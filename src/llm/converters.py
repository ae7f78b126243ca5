"""
Conversion from browser UI messages to gateway model messages.

UI messages carry typed parts; the gateway wants OpenAI-style
``{"role", "content"}`` messages. Reasoning, source, step and tool parts are
UI-only and are dropped. Image files on user messages become image inputs.
"""
from typing import Any, Dict, List, Optional

from src.core.logging_config import get_logger
from src.models.chat import UIMessage

logger = get_logger(__name__)


def _parts_of(message: UIMessage) -> List[Dict[str, Any]]:
    if message.parts:
        return message.parts
    if message.content:
        return [{"type": "text", "text": message.content}]
    return []


def _text_of(parts: List[Dict[str, Any]]) -> str:
    return "".join(
        p.get("text") or "" for p in parts if p.get("type") == "text"
    )


def _user_content(parts: List[Dict[str, Any]]) -> Optional[Any]:
    """Content for a user message: plain string unless images are attached."""
    content: List[Dict[str, Any]] = []
    has_image = False

    for part in parts:
        kind = part.get("type")
        if kind == "text" and part.get("text"):
            content.append({"type": "text", "text": part["text"]})
        elif kind == "file":
            media_type = part.get("mediaType") or ""
            if media_type.startswith("image/") and part.get("url"):
                content.append({"type": "image_url", "image_url": {"url": part["url"]}})
                has_image = True
            else:
                logger.debug(f"Dropping unsupported file part: {media_type or 'unknown'}")

    if not content:
        return None
    if not has_image:
        return "".join(c["text"] for c in content)
    return content


def convert_to_model_messages(messages: List[UIMessage]) -> List[Dict[str, Any]]:
    """
    Convert UI messages into the gateway's chat message format.

    Args:
        messages: Validated UI messages, oldest first

    Returns:
        List of ``{"role", "content"}`` dicts; messages with nothing to
        forward are skipped
    """
    converted: List[Dict[str, Any]] = []

    for message in messages:
        parts = _parts_of(message)

        if message.role == "user":
            content = _user_content(parts)
        else:
            content = _text_of(parts) or None

        if content is None:
            continue
        converted.append({"role": message.role, "content": content})

    return converted
