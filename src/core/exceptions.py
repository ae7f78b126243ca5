"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Optional


class ChatbotException(Exception):
    """
    Base exception for all chatbot errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(ChatbotException):
    """Raised when the request body fails validation."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class ConfigurationError(ChatbotException):
    """Raised when the server is missing required configuration."""
    status_code = 500
    error_code = "configuration_error"

    def __init__(self, message: str = "Missing AI Gateway API key"):
        super().__init__(message)


class LLMError(ChatbotException):
    """Raised when a gateway call fails."""
    status_code = 503
    error_code = "llm_error"

    def __init__(self, message: str = "AI gateway unavailable"):
        super().__init__(message)
