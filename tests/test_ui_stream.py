import json

from src.services.ui_stream import DONE_EVENT, UIMessageStreamWriter, format_sse, parse_ui_stream


def types(events):
    return [e["type"] for e in events]


def test_format_sse_frame():
    frame = format_sse({"type": "text-delta", "id": "t1", "delta": "héllo"})
    assert frame == 'data: {"type":"text-delta","id":"t1","delta":"héllo"}\n\n'
    assert DONE_EVENT == "data: [DONE]\n\n"


def test_start_carries_message_id():
    writer = UIMessageStreamWriter(message_id="msg_1")
    assert writer.start() == [{"type": "start", "messageId": "msg_1"}, {"type": "start-step"}]


def test_text_block_reuses_id_until_closed():
    writer = UIMessageStreamWriter()
    first = writer.text("a")
    second = writer.text("b")
    assert types(first) == ["text-start", "text-delta"]
    assert types(second) == ["text-delta"]
    assert first[0]["id"] == second[0]["id"]


def test_switching_kinds_closes_open_block():
    writer = UIMessageStreamWriter()
    writer.reasoning("hmm")
    events = writer.text("answer")
    assert types(events) == ["reasoning-end", "text-start", "text-delta"]


def test_finish_closes_blocks():
    writer = UIMessageStreamWriter()
    writer.text("done")
    events = writer.finish("stop")
    assert types(events) == ["text-end", "finish-step", "finish"]
    assert events[-1]["finishReason"] == "stop"


def test_finish_without_reason():
    assert UIMessageStreamWriter().finish() == [{"type": "finish-step"}, {"type": "finish"}]


def test_empty_deltas_emit_nothing():
    writer = UIMessageStreamWriter()
    assert writer.text("") == []
    assert writer.reasoning("") == []


def test_sources_are_deduplicated():
    writer = UIMessageStreamWriter()
    first = writer.source("https://example.com", "Example")
    assert first[0]["url"] == "https://example.com"
    assert first[0]["title"] == "Example"
    assert writer.source("https://example.com") == []
    assert "title" not in writer.source("https://example.org")[0]


def test_parse_stops_at_done_and_skips_noise():
    lines = [
        "",
        ": keep-alive",
        'data: {"type":"start"}',
        "data: not-json",
        b'data: {"type":"finish"}',
        "data: [DONE]",
        'data: {"type":"late"}',
    ]
    assert list(parse_ui_stream(lines)) == [{"type": "start"}, {"type": "finish"}]


def test_writer_output_parses_back():
    writer = UIMessageStreamWriter()
    events = writer.start() + writer.text("Hi") + writer.finish()
    body = "".join(format_sse(e) for e in events) + DONE_EVENT
    assert list(parse_ui_stream(body.splitlines())) == json.loads(json.dumps(events))
