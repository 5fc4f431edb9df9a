"""Testes do adapter Flask (blueprint e conversão de request)."""

from __future__ import annotations

import json

import pytest
from flask import Flask, request

from api.adapters import flask_adapter
from app.use_cases.whatsapp import WebhookProcessor
from config.settings import WhatsAppSettings
from tests.fakes.fake_whatsapp_client import CallRecorder, FakeWhatsAppClient
from tests.fakes.flow_envelopes import build_envelope, sign
from tests.fakes.webhook_payloads import envelope, messages_change, text_message


@pytest.fixture
def processor(flow_private_pem: str) -> WebhookProcessor:
    settings = WhatsAppSettings(
        verify_token="token",
        app_secret="secret",
        flow_private_key=flow_private_pem,
    )
    return WebhookProcessor(settings, FakeWhatsAppClient())


@pytest.fixture
def client(processor: WebhookProcessor):
    app = Flask(__name__)
    app.register_blueprint(flask_adapter.create_blueprint(processor))
    return app.test_client()


def test_to_webhook_request_keeps_raw_body_and_parsed_json() -> None:
    app = Flask(__name__)
    raw = b'{"object": "whatsapp_business_account"}'

    with app.test_request_context(
        "/webhook/whatsapp/?x=1",
        method="POST",
        data=raw,
        content_type="application/json",
        headers={"X-Forwarded-Proto": "https"},
    ):
        webhook_request = flask_adapter.to_webhook_request(request)

    assert webhook_request.url == "https://localhost/webhook/whatsapp/?x=1"
    assert webhook_request.body == raw
    assert webhook_request.parsed_body == {"object": "whatsapp_business_account"}
    assert webhook_request.query == {"x": "1"}


def test_blueprint_verification(client) -> None:
    response = client.get(
        "/webhook/whatsapp/?hub.mode=subscribe&hub.verify_token=token&hub.challenge=xyz"
    )

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "xyz"
    assert response.headers["X-Correlation-Id"]


def test_blueprint_receives_events(client, processor: WebhookProcessor) -> None:
    recorder = CallRecorder()
    processor.on_text(recorder.async_("text"))

    response = client.post("/webhook/whatsapp/", json=envelope(messages_change(text_message())))

    assert response.status_code == 200
    assert recorder.names == ["text"]


def test_blueprint_flow_ping(client, flow_public_key) -> None:
    flow_envelope = build_envelope({"version": "3.0", "action": "ping"}, flow_public_key)

    response = client.post(
        "/webhook/whatsapp/flow",
        data=flow_envelope.body,
        content_type="application/json",
        headers={"X-Hub-Signature-256": sign(flow_envelope.body, "secret")},
    )

    assert response.status_code == 200
    assert json.loads(response.get_data()) == {"version": "3.0", "data": {"status": "active"}}
