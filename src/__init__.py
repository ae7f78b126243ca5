"""
Source code root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI app, exception handlers and routes
- core/      : Configuration, logging, and cross-cutting utilities
- services/  : Chat streaming and model selection
- llm/       : AI gateway client and message conversion
- models/    : Pydantic models for request/response schemas
"""
__version__ = "0.1.0"
