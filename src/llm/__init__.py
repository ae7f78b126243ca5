"""
LLM module - AI gateway integration.

This module handles all gateway interactions:
- API calls through the OpenAI-compatible gateway
- UI message to model message conversion
"""
from src.llm.client import GatewayClient
from src.llm.converters import convert_to_model_messages

__all__ = [
    "GatewayClient",
    "convert_to_model_messages",
]
