import os
import tempfile
from types import SimpleNamespace

import pytest

# Keep test runs from writing into the project's logs/ directory
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="gateway-chat-logs-"))

from src.core.config import get_settings  # noqa: E402
from src.api.routes import chat as chat_routes  # noqa: E402


def make_chunk(
    content=None,
    reasoning=None,
    finish_reason=None,
    citations=None,
    annotations=None,
):
    """A chat completion chunk shaped like the openai SDK's objects."""
    delta = SimpleNamespace(content=content, reasoning=reasoning, annotations=annotations)
    choice = SimpleNamespace(delta=delta, finish_reason=finish_reason)
    return SimpleNamespace(choices=[choice], citations=citations)


class FakeGatewayClient:
    """Stands in for GatewayClient; replays `chunks` and records calls."""

    calls: list = []
    created: int = 0
    chunks: list = []
    fail_with: Exception | None = None

    def __init__(self, settings=None):
        type(self).created += 1
        self.settings = settings

    async def stream_chat(self, model, messages):
        type(self).calls.append({"model": model, "messages": messages})
        if type(self).fail_with is not None:
            raise type(self).fail_with
        chunks = list(type(self).chunks)

        async def iterate():
            for chunk in chunks:
                if isinstance(chunk, Exception):
                    raise chunk
                yield chunk

        return iterate()

    async def close(self):
        pass


@pytest.fixture
def reset_settings(monkeypatch):
    """Fresh settings and no cached chat service around each test."""
    get_settings.cache_clear()
    monkeypatch.setattr(chat_routes, "_chat_service", None)
    yield
    get_settings.cache_clear()


@pytest.fixture
def gateway_key(monkeypatch, reset_settings):
    monkeypatch.setenv("AI_GATEWAY_API_KEY", "test-gateway-key")
    for key in ("DEFAULT_MODEL", "SEARCH_MODEL", "SYSTEM_PROMPT"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    return "test-gateway-key"


@pytest.fixture
def no_gateway_key(monkeypatch, reset_settings):
    monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)
    monkeypatch.delenv("NUXT_AI_GATEWAY_API_KEY", raising=False)
    get_settings.cache_clear()


@pytest.fixture
def fake_gateway(monkeypatch, gateway_key):
    FakeGatewayClient.calls = []
    FakeGatewayClient.created = 0
    FakeGatewayClient.chunks = [
        make_chunk(content="Hel"),
        make_chunk(content="lo", finish_reason="stop"),
    ]
    FakeGatewayClient.fail_with = None
    monkeypatch.setattr(chat_routes, "GatewayClient", FakeGatewayClient)
    return FakeGatewayClient
