"""Registry de handlers do webhook WhatsApp.

Populado uma vez no setup e apenas lido durante o tráfego.
Registro é last-write-wins por chave.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from app.domain.flow_request import FlowType
from app.domain.webhook_events import STATUSES_TYPE, WILDCARD

logger = logging.getLogger(__name__)

# handler(client, evento) -> None | Awaitable[None]
Handler = Callable[[Any, Any], Any]
# handler(client, FlowEndpointRequest) -> dict | None | Awaitable[dict | None]
FlowHandler = Callable[[Any, Any], Any]


class HandlerRegistry:
    """Mapa explícito de handlers injetado no processador."""

    def __init__(self) -> None:
        self._message_handlers: dict[str, Handler] = {}
        self._event_handlers: dict[str, Handler] = {}
        self._flow_handlers: dict[str, FlowHandler] = {}
        self._status_handler: Handler | None = None
        self._pre_process_handler: Handler | None = None
        self._post_process_handler: Handler | None = None

    def on_message(self, message_type: str, handler: Handler) -> None:
        """Registra handler por tipo de mensagem (`"*"` para qualquer tipo).

        Raises:
            ValueError: Se `message_type` for `statuses` (use `on_status`)
        """
        key = str(message_type)
        if key == STATUSES_TYPE:
            raise ValueError("Use on_status() to register a status handler")
        self._replace(self._message_handlers, key, handler, "message")

    def on_status(self, handler: Handler) -> None:
        self._status_handler = handler

    def on_message_pre_process(self, handler: Handler) -> None:
        self._pre_process_handler = handler

    def on_message_post_process(self, handler: Handler) -> None:
        self._post_process_handler = handler

    def on_event(self, field: str, handler: Handler) -> None:
        """Registra handler para campos diferentes de `messages` (`"*"` = todos)."""
        self._replace(self._event_handlers, str(field), handler, "event")

    def on_flow(self, flow_type: FlowType | str, handler: FlowHandler) -> None:
        self._replace(self._flow_handlers, str(flow_type), handler, "flow")

    @property
    def status_handler(self) -> Handler | None:
        return self._status_handler

    @property
    def pre_process_handler(self) -> Handler | None:
        return self._pre_process_handler

    @property
    def post_process_handler(self) -> Handler | None:
        return self._post_process_handler

    def get_message_handler(self, message_type: str) -> Handler | None:
        """Handler do tipo exato ou, na falta dele, o curinga."""
        return self._message_handlers.get(message_type) or self._message_handlers.get(WILDCARD)

    def get_event_handler(self, field: str) -> Handler | None:
        return self._event_handlers.get(field) or self._event_handlers.get(WILDCARD)

    def get_flow_handler(self, *flow_types: FlowType | str) -> FlowHandler | None:
        """Primeiro handler registrado entre as chaves, na ordem informada."""
        for flow_type in flow_types:
            handler = self._flow_handlers.get(str(flow_type))
            if handler is not None:
                return handler
        return None

    @staticmethod
    def _replace(
        handlers: dict[str, Any],
        key: str,
        handler: Any,
        kind: str,
    ) -> None:
        if key in handlers:
            logger.debug("handler_replaced", extra={"handler_kind": kind, "key": key})
        handlers[key] = handler
