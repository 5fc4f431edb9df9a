"""Processador de webhooks WhatsApp (engine neutro de framework).

Orquestra:
- Verificação do challenge (GET)
- Parse, normalização e dispatch de eventos (POST /webhook)
- Endpoint de Flows criptografado (POST /flow)

Cada request é independente; o único estado compartilhado é o registry
(somente leitura durante o tráfego) e as settings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.webhook import (
    InvalidJsonError,
    UnsupportedObjectError,
    WebhookChallengeError,
    ensure_business_account,
    parse_webhook_body,
    verify_webhook_challenge,
)
from api.normalizers.whatsapp import iter_entry_changes
from app.coordinators.whatsapp.inbound import (
    BackgroundTasks,
    HandlerDispatcher,
    HandlerRegistry,
)
from app.domain.webhook_events import MessageType, NormalizedChange, WebhookField
from app.observability import get_correlation_id

from .flow_exchange import FlowExchangeProcessor
from .webhook_result import WebhookResult

if TYPE_CHECKING:
    from app.coordinators.whatsapp.inbound import FlowHandler, Handler
    from app.domain.flow_request import FlowType
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


class WebhookProcessor:
    """Engine de processamento: produz `WebhookResult` para qualquer adapter.

    Args:
        settings: WhatsAppSettings (verify_token, secrets, chave de Flows)
        client: Cliente WhatsApp entregue a todo handler
        registry: Registry de handlers; um novo é criado se omitido
        background: Controle de tasks do modo `async`
    """

    def __init__(
        self,
        settings: WhatsAppSettings,
        client: Any,
        registry: HandlerRegistry | None = None,
        background: BackgroundTasks | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._registry = registry or HandlerRegistry()
        self._background = background or BackgroundTasks()
        self._dispatcher = HandlerDispatcher(self._registry, client)
        self._flows = FlowExchangeProcessor(settings, client, self._registry)

    @property
    def settings(self) -> WhatsAppSettings:
        return self._settings

    @property
    def client(self) -> Any:
        return self._client

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    @property
    def processing_mode(self) -> str:
        return (self._settings.webhook_processing_mode or "inline").lower()

    # ── Registro de handlers ────────────────────────────────────────

    def on_message(self, message_type: MessageType | str, handler: Handler) -> None:
        self._registry.on_message(message_type, handler)

    def on_status(self, handler: Handler) -> None:
        self._registry.on_status(handler)

    def on_message_pre_process(self, handler: Handler) -> None:
        self._registry.on_message_pre_process(handler)

    def on_message_post_process(self, handler: Handler) -> None:
        self._registry.on_message_post_process(handler)

    def on_event(self, field: WebhookField | str, handler: Handler) -> None:
        self._registry.on_event(field, handler)

    def on_flow(self, flow_type: FlowType | str, handler: FlowHandler) -> None:
        self._registry.on_flow(flow_type, handler)

    def on_text(self, handler: Handler) -> None:
        self.on_message(MessageType.TEXT, handler)

    def on_image(self, handler: Handler) -> None:
        self.on_message(MessageType.IMAGE, handler)

    def on_video(self, handler: Handler) -> None:
        self.on_message(MessageType.VIDEO, handler)

    def on_audio(self, handler: Handler) -> None:
        self.on_message(MessageType.AUDIO, handler)

    def on_document(self, handler: Handler) -> None:
        self.on_message(MessageType.DOCUMENT, handler)

    def on_sticker(self, handler: Handler) -> None:
        self.on_message(MessageType.STICKER, handler)

    def on_interactive(self, handler: Handler) -> None:
        self.on_message(MessageType.INTERACTIVE, handler)

    def on_button(self, handler: Handler) -> None:
        self.on_message(MessageType.BUTTON, handler)

    def on_location(self, handler: Handler) -> None:
        self.on_message(MessageType.LOCATION, handler)

    def on_contacts(self, handler: Handler) -> None:
        self.on_message(MessageType.CONTACTS, handler)

    def on_reaction(self, handler: Handler) -> None:
        self.on_message(MessageType.REACTION, handler)

    def on_order(self, handler: Handler) -> None:
        self.on_message(MessageType.ORDER, handler)

    def on_system(self, handler: Handler) -> None:
        self.on_message(MessageType.SYSTEM, handler)

    # ── Atalhos por campo do webhook ────────────────────────────────

    def on_account_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.ACCOUNT_UPDATE, handler)

    def on_account_review_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.ACCOUNT_REVIEW_UPDATE, handler)

    def on_account_alerts(self, handler: Handler) -> None:
        self.on_event(WebhookField.ACCOUNT_ALERTS, handler)

    def on_business_capability_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.BUSINESS_CAPABILITY_UPDATE, handler)

    def on_phone_number_name_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.PHONE_NUMBER_NAME_UPDATE, handler)

    def on_phone_number_quality_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.PHONE_NUMBER_QUALITY_UPDATE, handler)

    def on_message_template_status_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.MESSAGE_TEMPLATE_STATUS_UPDATE, handler)

    def on_template_category_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.TEMPLATE_CATEGORY_UPDATE, handler)

    def on_message_template_quality_update(self, handler: Handler) -> None:
        self.on_event(WebhookField.MESSAGE_TEMPLATE_QUALITY_UPDATE, handler)

    def on_flows(self, handler: Handler) -> None:
        self.on_event(WebhookField.FLOWS, handler)

    def on_security(self, handler: Handler) -> None:
        self.on_event(WebhookField.SECURITY, handler)

    def on_history(self, handler: Handler) -> None:
        self.on_event(WebhookField.HISTORY, handler)

    def on_smb_message_echoes(self, handler: Handler) -> None:
        self.on_event(WebhookField.SMB_MESSAGE_ECHOES, handler)

    def on_smb_app_state_sync(self, handler: Handler) -> None:
        self.on_event(WebhookField.SMB_APP_STATE_SYNC, handler)

    # ── Processamento ───────────────────────────────────────────────

    def process_verification(
        self,
        mode: str | None,
        token: str | None,
        challenge: str | None,
    ) -> WebhookResult:
        """Responde ao challenge da Meta: 200 com o challenge ou 403."""
        try:
            answer = verify_webhook_challenge(
                hub_mode=mode,
                hub_verify_token=token,
                hub_challenge=challenge,
                expected_token=self._settings.verify_token,
            )
        except WebhookChallengeError as exc:
            logger.warning(
                "webhook_verification_failed",
                extra={"channel": "whatsapp", "reason": str(exc)},
            )
            return WebhookResult.error(403, "Forbidden")

        logger.info("webhook_verified", extra={"channel": "whatsapp"})
        return WebhookResult.text(200, answer)

    async def process_webhook(
        self,
        raw_body: bytes | str | Mapping[str, Any] | None,
    ) -> WebhookResult:
        """Parseia, normaliza e despacha o envelope do webhook.

        Returns:
            200 (com `{"errors": [...]}` se alguma entry falhou), 404 para
            `object` diferente de whatsapp_business_account, 500 se o corpo
            não puder ser parseado.
        """
        try:
            payload = parse_webhook_body(raw_body)
        except InvalidJsonError as exc:
            logger.error(
                "webhook_parse_failed",
                extra={"channel": "whatsapp", "reason": str(exc)},
            )
            return WebhookResult.error(500, "Internal Server Error")

        try:
            ensure_business_account(payload)
        except UnsupportedObjectError as exc:
            object_name = payload.get("object")
            logger.warning(
                "webhook_object_unsupported",
                extra={
                    "channel": "whatsapp",
                    "object": object_name if isinstance(object_name, str) else None,
                },
            )
            return WebhookResult.error(404, str(exc))

        entries = payload.get("entry") or []
        if not isinstance(entries, list):
            logger.error(
                "webhook_parse_failed",
                extra={"channel": "whatsapp", "reason": "entry_not_list"},
            )
            return WebhookResult.error(500, "Internal Server Error")

        errors: list[str] = []
        for entry in entries:
            try:
                await self._process_entry(entry)
            except Exception as exc:
                logger.exception("webhook_entry_failed", extra={"channel": "whatsapp"})
                errors.append(f"Error processing webhook: {exc}")

        if errors:
            return WebhookResult.json(200, {"errors": errors})
        return WebhookResult.empty(200)

    async def process_flow(
        self,
        raw_body: bytes | str,
        headers: Mapping[str, str] | None = None,
    ) -> WebhookResult:
        """Processa request criptografado do endpoint de Flows.

        O corpo deve ser exatamente o recebido (bytes) para a assinatura conferir.
        """
        return await self._flows.process(raw_body, headers)

    async def drain_background_tasks(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda dispatches do modo `async` durante o shutdown."""
        await self._background.drain(timeout_seconds=timeout_seconds)

    async def _process_entry(self, entry: Any) -> None:
        if not isinstance(entry, dict):
            raise InvalidJsonError("entry_not_object")

        changes = list(iter_entry_changes(entry))
        if not changes:
            return

        if self.processing_mode == "async":
            self._background.schedule(
                self._dispatch_changes(changes),
                correlation_id=get_correlation_id(),
            )
            return
        await self._dispatch_changes(changes)

    async def _dispatch_changes(self, changes: list[NormalizedChange]) -> None:
        failures = 0
        for change in changes:
            failures += await self._dispatcher.dispatch_change(change)
        logger.info(
            "webhook_processing_completed",
            extra={
                "channel": "whatsapp",
                "mode": self.processing_mode,
                "changes": len(changes),
                "handler_failures": failures,
            },
        )
