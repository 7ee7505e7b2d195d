from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from group_chat.infrastructure.ws.protocol import (
    JoinPayload,
    SendMessagePayload,
    WsInbound,
    describe_errors,
)


def test_inbound_envelope_defaults_data():
    msg = WsInbound.model_validate_json('{"type": "typingStart"}')

    assert msg.type == "typingStart"
    assert msg.data == {}


def test_join_payload_uses_camel_case_keys():
    payload = JoinPayload.model_validate(
        {"name": "Alice", "genderLabel": "F", "regionLabel": "EU", "avatarRef": "/uploads/a.png"},
    )

    assert payload.gender_label == "F"
    assert payload.region_label == "EU"
    assert payload.avatar_ref == "/uploads/a.png"


def test_send_payload_drops_forged_sender():
    payload = SendMessagePayload.model_validate(
        {"text": "hi", "sender": {"name": "Admin"}, "user": "Admin"},
    )

    assert payload.model_dump() == {"text": "hi", "timestamp": None}


def test_bare_string_message_is_rejected():
    with pytest.raises(PydanticValidationError) as excinfo:
        SendMessagePayload.model_validate("hi")

    assert describe_errors(excinfo.value).startswith("data:")


def test_missing_join_fields_are_described():
    with pytest.raises(PydanticValidationError) as excinfo:
        JoinPayload.model_validate({"name": "Alice"})

    reason = describe_errors(excinfo.value)
    assert "genderLabel" in reason
    assert "regionLabel" in reason


def test_locale_timestamp_falls_back_to_none():
    payload = SendMessagePayload.model_validate({"text": "hi", "timestamp": "10:32:11 AM"})

    assert payload.text == "hi"
    assert payload.timestamp is None


def test_iso_timestamp_is_parsed():
    payload = SendMessagePayload.model_validate(
        {"text": "hi", "timestamp": "2024-05-01T11:59:30+00:00"},
    )

    assert payload.timestamp is not None
    assert payload.timestamp.isoformat() == "2024-05-01T11:59:30+00:00"
