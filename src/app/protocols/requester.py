"""Contratos dos colaboradores externos entregues aos handlers.

Evita dependência direta do app na camada api.
"""

from __future__ import annotations

from typing import Any, Protocol


class RequesterProtocol(Protocol):
    """Executor de chamadas HTTP à Graph API."""

    async def send_request(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...

    async def aclose(self) -> None: ...


class WhatsAppClientProtocol(Protocol):
    """Cliente WhatsApp recebido por todo handler como primeiro argumento."""

    async def send_message(self, to: str, payload: dict[str, Any]) -> dict[str, Any]: ...

    async def mark_as_read(self, message_id: str) -> dict[str, Any]: ...
