"""Dispatcher de eventos canônicos para os handlers registrados.

Ordem por mensagem: pre-process → handler do tipo → post-process.
Cada etapa é isolada: falha é logada e a próxima etapa roda mesmo assim.
Sem retry.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.domain.webhook_events import (
        CanonicalMessage,
        CanonicalStatus,
        NormalizedChange,
        WebhookFieldEvent,
    )

    from .registry import Handler, HandlerRegistry

logger = logging.getLogger(__name__)


async def invoke_handler(handler: Handler, *args: Any) -> Any:
    """Chama handler síncrono ou assíncrono e retorna seu resultado."""
    result = handler(*args)
    if inspect.isawaitable(result):
        return await result
    return result


class HandlerDispatcher:
    """Executa handlers best-effort para cada item normalizado."""

    def __init__(self, registry: HandlerRegistry, client: Any) -> None:
        self._registry = registry
        self._client = client

    async def dispatch_change(self, change: NormalizedChange) -> int:
        """Despacha todos os itens de um change.

        Returns:
            Quantidade de handlers que falharam
        """
        failures = 0
        if change.kind == "statuses":
            for status in change.statuses:
                failures += await self.dispatch_status(status)
        elif change.kind == "messages":
            for message in change.messages:
                failures += await self.dispatch_message(message)
        elif change.event is not None:
            failures += await self.dispatch_event(change.event)
        return failures

    async def dispatch_message(self, message: CanonicalMessage) -> int:
        steps = (
            ("pre_process", self._registry.pre_process_handler),
            ("message", self._registry.get_message_handler(message.type)),
            ("post_process", self._registry.post_process_handler),
        )
        failures = 0
        for stage, handler in steps:
            if handler is None:
                continue
            if not await self._run(handler, message, stage=stage, event_type=message.type):
                failures += 1
        return failures

    async def dispatch_status(self, status: CanonicalStatus) -> int:
        handler = self._registry.status_handler
        if handler is None:
            return 0
        ok = await self._run(handler, status, stage="status", event_type=status.status)
        return 0 if ok else 1

    async def dispatch_event(self, event: WebhookFieldEvent) -> int:
        handler = self._registry.get_event_handler(event.field)
        if handler is None:
            logger.debug("webhook_event_unhandled", extra={"field": event.field})
            return 0
        ok = await self._run(handler, event, stage="event", event_type=event.field)
        return 0 if ok else 1

    async def _run(self, handler: Handler, event: Any, *, stage: str, event_type: str) -> bool:
        try:
            await invoke_handler(handler, self._client, event)
        except Exception:
            logger.exception(
                "webhook_handler_failed",
                extra={
                    "channel": "whatsapp",
                    "stage": stage,
                    "event_type": event_type,
                    "event_id": getattr(event, "id", None),
                    "wa_id": getattr(event, "from_number", None)
                    or getattr(event, "recipient_id", None),
                },
            )
            return False
        return True
