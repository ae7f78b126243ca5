import asyncio

import httpx
import openai
import pytest

from src.core.config import get_settings
from src.core.exceptions import ConfigurationError, LLMError
from src.llm.client import GatewayClient


def test_requires_key(no_gateway_key):
    with pytest.raises(ConfigurationError):
        GatewayClient()


def test_sdk_is_pointed_at_gateway(gateway_key, monkeypatch):
    monkeypatch.setenv("AI_GATEWAY_BASE_URL", "https://gateway.example.test/v1")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "12")
    get_settings.cache_clear()

    client = GatewayClient()
    assert str(client._client.base_url).rstrip("/") == "https://gateway.example.test/v1"
    assert client._client.api_key == gateway_key
    assert client._client.timeout == 12.0


def test_stream_chat_passes_model_and_messages(gateway_key, monkeypatch):
    client = GatewayClient()
    seen = {}

    async def fake_create(**kwargs):
        seen.update(kwargs)
        return "stream"

    monkeypatch.setattr(client._client.chat.completions, "create", fake_create)

    messages = [{"role": "user", "content": "Hi"}]
    result = asyncio.run(client.stream_chat(model="perplexity/sonar", messages=messages))

    assert result == "stream"
    assert seen == {"model": "perplexity/sonar", "messages": messages, "stream": True}


def test_stream_chat_wraps_sdk_errors(gateway_key, monkeypatch):
    client = GatewayClient()

    async def fake_create(**kwargs):
        raise openai.APIConnectionError(request=httpx.Request("POST", "https://gateway.example.test"))

    monkeypatch.setattr(client._client.chat.completions, "create", fake_create)

    with pytest.raises(LLMError):
        asyncio.run(client.stream_chat(model="openai/gpt-4o", messages=[]))
