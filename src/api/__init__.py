"""
API module - FastAPI app and HTTP handling.

This module handles:
- Request parsing and validation errors
- Streaming responses
- Route definitions
"""
from src.api.main import app

__all__ = ["app"]
