"""Testes do cliente WhatsApp entregue aos handlers."""

from __future__ import annotations

from typing import Any

import pytest

from api.connectors.whatsapp import WhatsAppClient
from config.settings import WhatsAppSettings


class _RecordingRequester:
    def __init__(self) -> None:
        self.requests: list[tuple[str, str, dict[str, Any] | None]] = []
        self.closed = False

    async def send_request(
        self, method: str, endpoint: str, body: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        self.requests.append((method, endpoint, body))
        return {"messages": [{"id": "wamid.1"}]}

    async def aclose(self) -> None:
        self.closed = True


def _client(phone_number_id: str = "106540352242922") -> tuple[WhatsAppClient, _RecordingRequester]:
    requester = _RecordingRequester()
    return WhatsAppClient(requester, WhatsAppSettings(phone_number_id=phone_number_id)), requester


@pytest.mark.asyncio
async def test_send_text_builds_cloud_api_body() -> None:
    client, requester = _client()

    await client.send_text("5511999990000", "Olá!", reply_to="wamid.IN")

    method, endpoint, body = requester.requests[0]
    assert method == "POST"
    assert endpoint == "106540352242922/messages"
    assert body == {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": "5511999990000",
        "type": "text",
        "text": {"body": "Olá!", "preview_url": False},
        "context": {"message_id": "wamid.IN"},
    }


@pytest.mark.asyncio
async def test_mark_as_read() -> None:
    client, requester = _client()

    await client.mark_as_read("wamid.IN")

    assert requester.requests[0][2] == {
        "messaging_product": "whatsapp",
        "status": "read",
        "message_id": "wamid.IN",
    }


@pytest.mark.asyncio
async def test_missing_phone_number_id() -> None:
    client, _ = _client(phone_number_id="")

    with pytest.raises(ValueError, match="phone_number_id"):
        await client.send_message("5511", {"type": "text"})


@pytest.mark.asyncio
async def test_aclose_closes_requester() -> None:
    client, requester = _client()

    await client.aclose()

    assert requester.closed is True
