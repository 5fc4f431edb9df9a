"""Processamento do endpoint de WhatsApp Flows (data exchange).

Fluxo por request:
1. Valida X-Hub-Signature-256 sobre o corpo bruto → 401
2. Descriptografa o envelope RSA/AES → resultado etiquetado por FlowErrorKind
3. Classifica: ping → JSON; error → `{}`; data_exchange → handler + resposta criptografada

Nenhuma exceção escapa para o transporte; o payload descriptografado nunca é logado.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.coordinators.whatsapp.flows import (
    classify_flow_request,
    create_error_ack_response,
    create_ping_response,
    normalize_handler_result,
)
from app.coordinators.whatsapp.inbound.dispatcher import invoke_handler
from app.domain.flow_request import FlowEndpointRequest, FlowType
from app.infra.crypto import (
    SIGNATURE_HEADER,
    DecryptedFlowRequest,
    FlowDecryptOutcome,
    FlowEncryptionError,
    FlowErrorKind,
    decrypt_flow_envelope,
    encrypt_flow_response,
    verify_signature,
)

from .webhook_result import WebhookResult

if TYPE_CHECKING:
    from app.coordinators.whatsapp.inbound.registry import HandlerRegistry
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)

# 421 sinaliza para a Meta baixar novamente a chave pública
FLOW_ERROR_STATUS: dict[FlowErrorKind, int] = {
    FlowErrorKind.VERIFICATION: 401,
    FlowErrorKind.PARSE: 400,
    FlowErrorKind.KEY_MISMATCH: 421,
    FlowErrorKind.DECRYPTION: 500,
    FlowErrorKind.ENCRYPTION: 500,
    FlowErrorKind.CONFIGURATION: 503,
}

_FLOW_ERROR_MESSAGE: dict[FlowErrorKind, str] = {
    FlowErrorKind.VERIFICATION: "Unauthorized",
    FlowErrorKind.PARSE: "Bad Request",
    FlowErrorKind.KEY_MISMATCH: "Failed to decrypt the request. Please verify your private key.",
    FlowErrorKind.DECRYPTION: "Internal server error",
    FlowErrorKind.ENCRYPTION: "Internal server error",
    FlowErrorKind.CONFIGURATION: "Flow endpoint not configured",
}


def get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Busca header sem diferenciar maiúsculas/minúsculas."""
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def flow_failure(kind: FlowErrorKind) -> WebhookResult:
    return WebhookResult.error(FLOW_ERROR_STATUS[kind], _FLOW_ERROR_MESSAGE[kind])


class FlowExchangeProcessor:
    """Máquina de estados de um request do endpoint de Flows."""

    def __init__(
        self,
        settings: WhatsAppSettings,
        client: Any,
        registry: HandlerRegistry,
    ) -> None:
        self._settings = settings
        self._client = client
        self._registry = registry
        self._fallback_warned = False

    async def process(
        self,
        raw_body: bytes | str,
        headers: Mapping[str, str] | None,
    ) -> WebhookResult:
        try:
            return await self._process(raw_body, headers)
        except Exception:
            logger.exception("flow_request_failed", extra={"channel": "whatsapp"})
            return WebhookResult.error(500, "Internal server error")

    async def _process(
        self,
        raw_body: bytes | str,
        headers: Mapping[str, str] | None,
    ) -> WebhookResult:
        body = raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body

        if not self._verify_signature(body, get_header(headers, SIGNATURE_HEADER)):
            return flow_failure(FlowErrorKind.VERIFICATION)

        outcome = self._decrypt(body)
        if outcome.request is None:
            kind = outcome.error_kind or FlowErrorKind.DECRYPTION
            log = logger.error if FLOW_ERROR_STATUS[kind] >= 500 else logger.warning
            log(
                "flow_decryption_failed",
                extra={"channel": "whatsapp", "error_kind": kind.value, "error": outcome.error},
            )
            return flow_failure(kind)

        return await self._route(outcome.request)

    def _verify_signature(self, body: bytes, signature: str | None) -> bool:
        if self._settings.uses_signature_fallback and not self._fallback_warned:
            self._fallback_warned = True
            logger.warning(
                "flow_signature_secret_fallback",
                extra={"channel": "whatsapp", "reason": "WHATSAPP_APP_SECRET not configured"},
            )

        if verify_signature(body, signature, self._settings.flow_signature_secret):
            return True
        logger.warning(
            "flow_signature_invalid",
            extra={"channel": "whatsapp", "has_signature": bool(signature)},
        )
        return False

    def _decrypt(self, body: bytes) -> FlowDecryptOutcome:
        if not self._settings.flows_enabled:
            return FlowDecryptOutcome(
                error_kind=FlowErrorKind.CONFIGURATION,
                error="WHATSAPP_FLOW_PRIVATE_KEY not configured",
            )
        return decrypt_flow_envelope(
            body,
            private_key_pem=self._settings.flow_private_key,
            private_key_passphrase=self._settings.flow_private_key_passphrase or None,
        )

    async def _route(self, decrypted: DecryptedFlowRequest) -> WebhookResult:
        payload = decrypted.payload
        flow_type = classify_flow_request(payload)

        if flow_type is FlowType.PING:
            logger.info("flow_ping_received", extra={"channel": "whatsapp"})
            return WebhookResult.json(200, create_ping_response())

        if flow_type is FlowType.ERROR:
            data = payload.get("data") or {}
            logger.warning(
                "flow_error_notification_received",
                extra={
                    "channel": "whatsapp",
                    "screen": payload.get("screen"),
                    "error_key": data.get("error", data.get("error_key")),
                },
            )
            return WebhookResult.json(200, create_error_ack_response())

        if flow_type is FlowType.CHANGE:
            return await self._exchange(decrypted)

        logger.warning(
            "flow_request_unknown_type",
            extra={"channel": "whatsapp", "action": payload.get("action")},
        )
        return WebhookResult.error(400, "Unknown request type")

    async def _exchange(self, decrypted: DecryptedFlowRequest) -> WebhookResult:
        request = FlowEndpointRequest.from_payload(decrypted.payload)
        handler = self._registry.get_flow_handler(FlowType.CHANGE, FlowType.ALL)
        if handler is None:
            logger.warning(
                "flow_handler_not_found",
                extra={"channel": "whatsapp", "action": request.action},
            )
            return WebhookResult.error(404, "Handler not found")

        try:
            result = await invoke_handler(handler, self._client, request)
        except Exception:
            logger.exception(
                "flow_handler_failed",
                extra={"channel": "whatsapp", "action": request.action, "screen": request.screen},
            )
            result = None

        try:
            encrypted = encrypt_flow_response(
                response=normalize_handler_result(result),
                aes_key=decrypted.aes_key,
                iv=decrypted.iv,
            )
        except FlowEncryptionError as exc:
            logger.error(
                "flow_response_encryption_failed",
                extra={"channel": "whatsapp", "error": str(exc)},
            )
            return flow_failure(FlowErrorKind.ENCRYPTION)

        logger.info(
            "flow_data_exchange_completed",
            extra={"channel": "whatsapp", "action": request.action, "screen": request.screen},
        )
        return WebhookResult.text(200, encrypted)
