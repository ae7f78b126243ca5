from src.llm.converters import convert_to_model_messages
from src.models.chat import UIMessage


def msg(role, *parts, **extra):
    return UIMessage(role=role, parts=list(parts), **extra)


def text(value):
    return {"type": "text", "text": value}


def test_text_parts_are_joined():
    converted = convert_to_model_messages([msg("user", text("Hello, "), text("world"))])
    assert converted == [{"role": "user", "content": "Hello, world"}]


def test_conversation_keeps_roles_and_order():
    converted = convert_to_model_messages([
        msg("system", text("Be brief.")),
        msg("user", text("Hi")),
        msg("assistant", {"type": "step-start"}, text("Hello!")),
        msg("user", text("Bye")),
    ])
    assert [m["role"] for m in converted] == ["system", "user", "assistant", "user"]
    assert converted[2]["content"] == "Hello!"


def test_reasoning_and_source_parts_are_dropped():
    converted = convert_to_model_messages([
        msg(
            "assistant",
            {"type": "reasoning", "text": "thinking..."},
            text("Paris."),
            {"type": "source-url", "sourceId": "s1", "url": "https://example.com"},
        )
    ])
    assert converted == [{"role": "assistant", "content": "Paris."}]


def test_plain_content_is_used_without_parts():
    converted = convert_to_model_messages([UIMessage(role="user", content="Legacy client")])
    assert converted == [{"role": "user", "content": "Legacy client"}]


def test_image_file_becomes_image_input():
    converted = convert_to_model_messages([
        msg(
            "user",
            text("What is this?"),
            {"type": "file", "mediaType": "image/png", "url": "data:image/png;base64,AAAA"},
        )
    ])
    assert converted == [{
        "role": "user",
        "content": [
            {"type": "text", "text": "What is this?"},
            {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
        ],
    }]


def test_non_image_file_is_dropped():
    converted = convert_to_model_messages([
        msg("user", text("Summarise"), {"type": "file", "mediaType": "application/pdf", "url": "https://x/y.pdf"})
    ])
    assert converted == [{"role": "user", "content": "Summarise"}]


def test_messages_without_content_are_skipped():
    converted = convert_to_model_messages([
        msg("user", text("Hi")),
        msg("assistant", {"type": "reasoning", "text": "..."}),
    ])
    assert converted == [{"role": "user", "content": "Hi"}]
