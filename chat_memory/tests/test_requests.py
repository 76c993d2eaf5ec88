import pytest

from chat_memory.api.requests import ClearCommand, SendCommand, parse_chat_request
from chat_memory.domain.exceptions import ValidationError


def test_parse_send():
    assert parse_chat_request({"message": " hi "}) == SendCommand(text=" hi ")


def test_parse_clear_takes_priority():
    assert parse_chat_request({"action": "clear"}) == ClearCommand()
    assert parse_chat_request({"action": "clear", "message": "hi"}) == ClearCommand()


@pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "   "}, {"message": 42}, {"action": "reset"}])
def test_parse_rejects_missing_message(payload):
    with pytest.raises(ValidationError) as ei:
        parse_chat_request(payload)
    assert ei.value.message == "Message required"
    assert ei.value.http_status == 400


@pytest.mark.parametrize("payload", [None, [], "hi"])
def test_parse_rejects_non_object(payload):
    with pytest.raises(ValidationError) as ei:
        parse_chat_request(payload)
    assert ei.value.message == "Invalid request format"
