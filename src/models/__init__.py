"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from src.models.chat import (
    UIMessage,
    ChatRequest,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "UIMessage",
    "ChatRequest",
    "HealthResponse",
    "ErrorResponse",
]
