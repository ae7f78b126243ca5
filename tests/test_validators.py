import pytest

from src.core.exceptions import ValidationError
from src.core.validators import parse_json_body, validate_chat_payload, validate_messages


@pytest.mark.parametrize("messages", [None, [], "hi", {"role": "user"}, 3])
def test_validate_messages_rejects(messages):
    is_valid, error = validate_messages(messages)
    assert not is_valid
    assert error == "Missing messages payload"


def test_validate_messages_accepts_list():
    assert validate_messages([{"role": "user", "content": "hi"}]) == (True, None)


def test_parse_json_body():
    assert parse_json_body(b'{"messages": []}') == {"messages": []}


@pytest.mark.parametrize("raw", [b"", b"   ", b"{oops", b"\xff\xfe"])
def test_parse_json_body_rejects(raw):
    with pytest.raises(ValidationError):
        parse_json_body(raw)


def test_payload_aliases_and_defaults():
    request = validate_chat_payload({"messages": [{"role": "user", "content": "hi"}]})
    assert request.model is None
    assert request.web_search is False

    request = validate_chat_payload({
        "messages": [{"role": "user", "content": "hi"}],
        "model": "openai/gpt-4o",
        "webSearch": True,
    })
    assert request.model == "openai/gpt-4o"
    assert request.web_search is True


def test_unknown_message_keys_are_kept():
    request = validate_chat_payload({
        "messages": [{"id": "a", "role": "user", "parts": [{"type": "text", "text": "hi"}], "createdAt": "now"}]
    })
    assert request.messages[0].parts == [{"type": "text", "text": "hi"}]


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"messages": [{"content": "no role"}]}, "messages.0.role"),
        ({"messages": ["just text"]}, "messages.0"),
        ({"messages": [{"role": "user"}], "model": 42}, "model"),
        ({"messages": [{"role": "user"}], "webSearch": "maybe"}, "webSearch"),
    ],
)
def test_payload_shape_errors_name_the_field(payload, field):
    with pytest.raises(ValidationError) as info:
        validate_chat_payload(payload)
    assert info.value.field == field
    assert info.value.status_code == 400


def test_payload_must_be_object():
    with pytest.raises(ValidationError) as info:
        validate_chat_payload([{"role": "user"}])
    assert info.value.message == "Request body must be a JSON object"


def test_null_web_search_is_accepted():
    request = validate_chat_payload({
        "messages": [{"role": "user", "content": "hi"}],
        "webSearch": None,
    })
    assert not request.web_search
