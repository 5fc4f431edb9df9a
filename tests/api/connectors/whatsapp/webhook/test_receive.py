import json

from api.connectors.whatsapp.webhook.receive import (
    InvalidJsonError,
    UnsupportedObjectError,
    ensure_business_account,
    parse_webhook_body,
)


def test_parse_webhook_body_ok() -> None:
    body = json.dumps({"object": "whatsapp_business_account", "entry": []}).encode("utf-8")

    payload = parse_webhook_body(body)

    assert payload == {"object": "whatsapp_business_account", "entry": []}


def test_parse_webhook_body_accepts_mapping_and_empty() -> None:
    assert parse_webhook_body({"entry": []}) == {"entry": []}
    assert parse_webhook_body(b"") == {}
    assert parse_webhook_body(None) == {}


def test_parse_webhook_body_invalid_json() -> None:
    try:
        parse_webhook_body(b"{invalid}")
    except InvalidJsonError as exc:
        assert "invalid_json" in str(exc)
    else:
        raise AssertionError("Expected InvalidJsonError")


def test_parse_webhook_body_not_object() -> None:
    try:
        parse_webhook_body("[1, 2]")
    except InvalidJsonError as exc:
        assert "payload_not_object" in str(exc)
    else:
        raise AssertionError("Expected InvalidJsonError")


def test_ensure_business_account() -> None:
    ensure_business_account({"object": "whatsapp_business_account"})

    try:
        ensure_business_account({"object": "page"})
    except UnsupportedObjectError as exc:
        assert str(exc) == "Received webhook for non-WhatsApp event"
    else:
        raise AssertionError("Expected UnsupportedObjectError")
