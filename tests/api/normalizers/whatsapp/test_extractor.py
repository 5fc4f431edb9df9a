"""Testes do extrator de payloads WhatsApp (normalização canônica)."""

from __future__ import annotations

import logging

import pytest

from api.normalizers.whatsapp import (
    build_message,
    extract_payload_changes,
    iter_entry_changes,
    normalize_change,
)
from api.normalizers.whatsapp._extraction_helpers import (
    as_str,
    extract_metadata,
    extract_profile_name,
)
from app.domain.webhook_events import ChangeMetadata, MessageType
from tests.fakes.webhook_payloads import (
    DISPLAY_PHONE,
    PHONE_NUMBER_ID,
    WABA_ID,
    envelope,
    field_change,
    messages_change,
    status_change,
    text_message,
)


def test_text_message_is_fully_normalized() -> None:
    change = normalize_change(messages_change(text_message("Oi")), WABA_ID)

    assert change.kind == "messages"
    (message,) = change.messages
    assert message.id == "wamid.TEXT1"
    assert message.from_number == "5511999990000"
    assert message.type == MessageType.TEXT
    assert message.text == {"body": "Oi"}
    assert message.text_body == "Oi"
    assert message.payload == {"body": "Oi"}
    assert message.waba_id == WABA_ID
    assert message.phone_number_id == PHONE_NUMBER_ID
    assert message.display_phone_number == DISPLAY_PHONE
    assert message.profile_name == "Maria"
    assert message.image is None


def test_only_matching_type_block_is_populated() -> None:
    msg = {
        "from": "551188887777",
        "id": "wamid.IMG",
        "timestamp": 1749416383,
        "type": "image",
        "image": {"id": "media-1", "mime_type": "image/jpeg"},
        "text": {"body": "ignored"},
    }

    message = build_message(msg, ChangeMetadata(waba_id=WABA_ID))

    assert message.image == {"id": "media-1", "mime_type": "image/jpeg"}
    assert message.text is None
    assert message.timestamp == "1749416383"


def test_contacts_block_is_a_list() -> None:
    msg = {
        "from": "551188887777",
        "id": "wamid.CT",
        "timestamp": "1",
        "type": "contacts",
        "contacts": [{"name": {"formatted_name": "Ana"}}, "not-a-dict"],
    }

    message = build_message(msg, ChangeMetadata())

    assert message.contacts == [{"name": {"formatted_name": "Ana"}}]


def test_context_and_errors_are_preserved() -> None:
    msg = {
        "from": "551188887777",
        "id": "wamid.UNS",
        "timestamp": "1",
        "type": "unsupported",
        "context": {"from": "15550783881", "id": "wamid.ORIG"},
        "errors": [{"code": 131051, "title": "Message type unknown"}],
    }

    message = build_message(msg, ChangeMetadata())

    assert message.type == "unsupported"
    assert message.payload is None
    assert message.context == {"from": "15550783881", "id": "wamid.ORIG"}
    assert message.errors == [{"code": 131051, "title": "Message type unknown"}]


def test_unknown_type_is_kept_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    msg = {"from": "1", "id": "wamid.X", "timestamp": "1", "type": "hologram", "hologram": {}}

    with caplog.at_level(logging.INFO, logger="api.normalizers.whatsapp.extractor"):
        message = build_message(msg, ChangeMetadata())

    assert message.type == "hologram"
    assert message.payload is None
    assert message.raw == msg
    assert any(r.message == "unsupported_message_type_received" for r in caplog.records)


def test_missing_type_becomes_unknown() -> None:
    message = build_message({"id": "wamid.N", "from": "1", "timestamp": "1"}, ChangeMetadata())

    assert message.type == MessageType.UNKNOWN


def test_statuses_take_precedence_over_messages() -> None:
    raw = status_change("read")
    raw["value"]["messages"] = [text_message()]

    change = normalize_change(raw, WABA_ID)

    assert change.kind == "statuses"
    assert change.messages == ()
    (status,) = change.statuses
    assert status.id == "wamid.OUT1"
    assert status.status == "read"
    assert status.type == "statuses"
    assert status.recipient_id == "5511999990000"
    assert status.phone_number_id == PHONE_NUMBER_ID
    assert status.conversation == {"id": "conv-1", "origin": {"type": "service"}}
    assert status.pricing == {"billable": True, "category": "service"}


def test_other_fields_become_field_events() -> None:
    value = {"event": "VERIFIED_ACCOUNT", "phone_number": "15550783881"}

    change = normalize_change(field_change("account_update", value), WABA_ID)

    assert change.kind == "field"
    assert change.event is not None
    assert change.event.field == "account_update"
    assert change.event.waba_id == WABA_ID
    assert change.event.value == value


def test_messages_change_without_value_yields_nothing() -> None:
    change = normalize_change({"field": "messages"}, WABA_ID)

    assert change.kind == "messages"
    assert change.messages == ()


def test_iter_entry_changes_skips_malformed_changes() -> None:
    entry = {"id": WABA_ID, "changes": ["garbage", messages_change(text_message())]}

    changes = list(iter_entry_changes(entry))

    assert len(changes) == 1
    assert changes[0].messages[0].waba_id == WABA_ID


def test_extract_payload_changes_walks_every_entry() -> None:
    payload = envelope(messages_change(text_message()), status_change())
    payload["entry"].append({"id": "other-waba", "changes": [field_change("flows", {})]})

    changes = extract_payload_changes(payload)

    assert [c.kind for c in changes] == ["messages", "statuses", "field"]
    assert changes[2].event.waba_id == "other-waba"


class TestExtractionHelpers:
    """Helpers de extração tolerantes a formato inesperado."""

    def test_as_str(self) -> None:
        assert as_str(None) == ""
        assert as_str(123) == "123"
        assert as_str("abc") == "abc"

    def test_profile_name_missing(self) -> None:
        assert extract_profile_name({}) == ""
        assert extract_profile_name({"contacts": ["x"]}) == ""
        assert extract_profile_name({"contacts": [{"profile": "x"}]}) == ""

    def test_metadata_defaults(self) -> None:
        metadata = extract_metadata({"metadata": "broken"}, WABA_ID)

        assert metadata == ChangeMetadata(waba_id=WABA_ID)
