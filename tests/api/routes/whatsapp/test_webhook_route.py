"""Testes para endpoints da rota de webhook WhatsApp."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from api.routes.whatsapp import webhook
from api.routes.whatsapp.dependencies import get_webhook_processor
from app.use_cases.whatsapp import WebhookProcessor
from config.settings import WhatsAppSettings
from tests.fakes.asgi_requests import build_request
from tests.fakes.fake_whatsapp_client import CallRecorder, FakeWhatsAppClient
from tests.fakes.webhook_payloads import envelope, messages_change, text_message


def _state() -> SimpleNamespace:
    processor = WebhookProcessor(WhatsAppSettings(verify_token="token"), FakeWhatsAppClient())
    return SimpleNamespace(webhook_processor=processor)


@pytest.mark.asyncio
async def test_verify_webhook_success() -> None:
    request = build_request(
        method="GET",
        query_string="hub.mode=subscribe&hub.verify_token=token&hub.challenge=abc",
        state=_state(),
    )

    response = await webhook.verify_webhook(request)

    assert response.status_code == 200
    assert response.body == b"abc"
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["x-correlation-id"]


@pytest.mark.asyncio
async def test_verify_webhook_invalid_token() -> None:
    request = build_request(
        method="GET",
        query_string="hub.mode=subscribe&hub.verify_token=wrong&hub.challenge=abc",
        state=_state(),
    )

    response = await webhook.verify_webhook(request)

    assert response.status_code == 403
    assert json.loads(response.body) == {"error": "Forbidden"}


@pytest.mark.asyncio
async def test_receive_webhook_dispatches_and_echoes_correlation_id() -> None:
    state = _state()
    recorder = CallRecorder()
    state.webhook_processor.on_text(recorder.sync("text"))
    body = json.dumps(envelope(messages_change(text_message()))).encode("utf-8")
    request = build_request(
        method="POST",
        body=body,
        headers={"Content-Type": "application/json", "X-Correlation-Id": "corr-123"},
        state=state,
    )

    response = await webhook.receive_webhook(request)

    assert response.status_code == 200
    assert response.body == b""
    assert response.headers["x-correlation-id"] == "corr-123"
    assert recorder.names == ["text"]


@pytest.mark.asyncio
async def test_receive_webhook_invalid_json() -> None:
    request = build_request(method="POST", body=b"{invalid", state=_state())

    response = await webhook.receive_webhook(request)

    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "Internal Server Error"}


def test_missing_processor_raises() -> None:
    request = build_request(method="GET", state=SimpleNamespace())

    with pytest.raises(RuntimeError, match="webhook_processor"):
        get_webhook_processor(request)
