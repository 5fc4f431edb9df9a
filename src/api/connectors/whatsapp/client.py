"""Cliente WhatsApp entregue aos handlers.

Envolve um requester (RequesterProtocol) e o phone_number_id configurado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.requester import RequesterProtocol
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)

MESSAGING_PRODUCT = "whatsapp"


class WhatsAppClient:
    """Operações mínimas da Cloud API usadas pelos handlers."""

    def __init__(self, requester: RequesterProtocol, settings: WhatsAppSettings) -> None:
        self._requester = requester
        self._settings = settings

    @property
    def requester(self) -> RequesterProtocol:
        return self._requester

    @property
    def phone_number_id(self) -> str:
        return self._settings.phone_number_id

    def _messages_endpoint(self) -> str:
        if not self.phone_number_id:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.phone_number_id}/messages"

    async def send_message(self, to: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Envia mensagem; `payload` traz `type` e o bloco do tipo.

        Exemplo: `{"type": "text", "text": {"body": "oi"}}`.
        """
        body = {
            "messaging_product": MESSAGING_PRODUCT,
            "recipient_type": "individual",
            "to": to,
            **payload,
        }
        result = await self._requester.send_request("POST", self._messages_endpoint(), body)
        logger.info("whatsapp_message_sent", extra={"message_type": payload.get("type")})
        return result

    async def send_text(
        self,
        to: str,
        body: str,
        *,
        preview_url: bool = False,
        reply_to: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": "text",
            "text": {"body": body, "preview_url": preview_url},
        }
        if reply_to:
            payload["context"] = {"message_id": reply_to}
        return await self.send_message(to, payload)

    async def mark_as_read(self, message_id: str) -> dict[str, Any]:
        """Marca mensagem recebida como lida."""
        body = {
            "messaging_product": MESSAGING_PRODUCT,
            "status": "read",
            "message_id": message_id,
        }
        return await self._requester.send_request("POST", self._messages_endpoint(), body)

    async def aclose(self) -> None:
        await self._requester.aclose()
