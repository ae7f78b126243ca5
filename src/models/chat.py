"""
Request and Response models for the Chat API.

These Pydantic models define the contract between the browser and server.
They provide:
- Type validation
- Automatic documentation
- Request/response serialization
"""
from datetime import datetime
from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, ConfigDict, Field


class UIMessage(BaseModel):
    """
    A chat message as the browser keeps it.

    Content lives in ``parts`` (text, reasoning, file, source and tool
    parts). Older clients may send a plain ``content`` string instead.
    Unknown keys are kept so nothing the client sends is lost.
    """
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(
        default=None,
        description="Client-side message identifier"
    )
    role: Literal["system", "user", "assistant"] = Field(
        ...,
        description="Author of the message"
    )
    parts: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Message parts, e.g. {'type': 'text', 'text': 'Hi'}",
        examples=[[{"type": "text", "text": "What is the capital of France?"}]]
    )
    content: Optional[str] = Field(
        default=None,
        description="Plain-text content for clients that do not send parts"
    )
    metadata: Optional[Dict[str, Any]] = None


class ChatRequest(BaseModel):
    """
    Request model for the /api/chat endpoint.

    Attributes:
        messages: Conversation so far, oldest first.
        model: Gateway model id, e.g. 'openai/gpt-4o'.
        web_search: Route the request to the search-capable model.
    """
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    messages: List[UIMessage] = Field(
        ...,
        min_length=1,
        description="The conversation, oldest message first"
    )
    model: Optional[str] = Field(
        default=None,
        description="Gateway model id; the default model is used when omitted",
        examples=["openai/gpt-4o"]
    )
    # null is accepted and treated as False
    web_search: Optional[bool] = Field(
        default=False,
        alias="webSearch",
        description="If True, the search-capable model is used regardless of 'model'"
    )


class HealthResponse(BaseModel):
    """Response model for the /health endpoints."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
