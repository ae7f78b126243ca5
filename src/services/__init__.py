"""
Services module - Business logic layer.

- chat_service.py : model selection and streaming chat replies
- ui_stream.py    : UI message stream events and SSE framing
"""
from src.services.chat_service import ChatService, select_model
from src.services.ui_stream import UIMessageStreamWriter, format_sse, parse_ui_stream

__all__ = [
    "ChatService",
    "select_model",
    "UIMessageStreamWriter",
    "format_sse",
    "parse_ui_stream",
]
