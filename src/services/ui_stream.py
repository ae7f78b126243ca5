"""
UI message stream - the server-sent event protocol the chat UI consumes.

One assistant reply is a sequence of JSON events, each sent as
``data: <json>\\n\\n`` and terminated by ``data: [DONE]``:

    start, start-step,
    reasoning-start / reasoning-delta / reasoning-end,
    text-start / text-delta / text-end,
    source-url,
    finish-step, finish   (or error)

Text and reasoning arrive as blocks; each block has an id and must be
closed before the step finishes.
"""
import json
import uuid
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

UI_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
    "x-vercel-ai-ui-message-stream": "v1",
}

DONE_EVENT = "data: [DONE]\n\n"


def format_sse(event: Dict[str, Any]) -> str:
    """Encode one event as an SSE data frame."""
    return f"data: {json.dumps(event, separators=(',', ':'), ensure_ascii=False)}\n\n"


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


class UIMessageStreamWriter:
    """
    Builds the events of one assistant reply.

    Every method returns the list of events to emit (possibly empty), so the
    caller only forwards them. Tracks which block is open so block ends are
    never missed, and suppresses duplicate source urls.
    """

    def __init__(self, message_id: Optional[str] = None):
        self.message_id = message_id or _new_id("msg")
        self._text_id: Optional[str] = None
        self._reasoning_id: Optional[str] = None
        self._sources: Set[str] = set()

    def start(self) -> List[Dict[str, Any]]:
        return [
            {"type": "start", "messageId": self.message_id},
            {"type": "start-step"},
        ]

    def reasoning(self, delta: str) -> List[Dict[str, Any]]:
        if not delta:
            return []
        events = self._close_text()
        if self._reasoning_id is None:
            self._reasoning_id = _new_id("reasoning")
            events.append({"type": "reasoning-start", "id": self._reasoning_id})
        events.append({"type": "reasoning-delta", "id": self._reasoning_id, "delta": delta})
        return events

    def text(self, delta: str) -> List[Dict[str, Any]]:
        if not delta:
            return []
        events = self._close_reasoning()
        if self._text_id is None:
            self._text_id = _new_id("text")
            events.append({"type": "text-start", "id": self._text_id})
        events.append({"type": "text-delta", "id": self._text_id, "delta": delta})
        return events

    def source(self, url: str, title: Optional[str] = None) -> List[Dict[str, Any]]:
        if not url or url in self._sources:
            return []
        self._sources.add(url)
        event: Dict[str, Any] = {"type": "source-url", "sourceId": _new_id("src"), "url": url}
        if title:
            event["title"] = title
        return [event]

    def finish(self, finish_reason: Optional[str] = None) -> List[Dict[str, Any]]:
        events = self._close_reasoning() + self._close_text()
        events.append({"type": "finish-step"})
        finish: Dict[str, Any] = {"type": "finish"}
        if finish_reason:
            finish["finishReason"] = finish_reason
        events.append(finish)
        return events

    def error(self, error_text: str) -> List[Dict[str, Any]]:
        return [{"type": "error", "errorText": error_text}]

    def _close_text(self) -> List[Dict[str, Any]]:
        if self._text_id is None:
            return []
        event = {"type": "text-end", "id": self._text_id}
        self._text_id = None
        return [event]

    def _close_reasoning(self) -> List[Dict[str, Any]]:
        if self._reasoning_id is None:
            return []
        event = {"type": "reasoning-end", "id": self._reasoning_id}
        self._reasoning_id = None
        return [event]


def parse_ui_stream(lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
    """
    Decode SSE lines of a UI message stream into events.

    Blank lines and non-data lines are skipped; iteration stops at
    ``[DONE]``. Lines that are not JSON are skipped too.
    """
    for line in lines:
        if isinstance(line, bytes):
            line = line.decode("utf-8")
        line = line.strip()
        if not line.startswith("data:"):
            continue
        data = line[len("data:"):].strip()
        if data == "[DONE]":
            return
        try:
            yield json.loads(data)
        except json.JSONDecodeError:
            continue
