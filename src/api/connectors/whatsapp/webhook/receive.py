"""Parse e validação inicial do webhook (sem PII)."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from app.domain.webhook_events import WHATSAPP_BUSINESS_ACCOUNT


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


class UnsupportedObjectError(WebhookRequestError):
    """Envelope de outro produto (object != whatsapp_business_account)."""


def parse_webhook_body(raw_body: bytes | str | Mapping[str, Any] | None) -> dict[str, Any]:
    """Parseia o corpo do webhook.

    Aceita bytes/str (corpo bruto) ou um mapping já parseado pelo framework.

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto
    """
    if isinstance(raw_body, Mapping):
        return dict(raw_body)

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")
    return payload


def ensure_business_account(payload: Mapping[str, Any]) -> None:
    """Garante que o envelope é da WhatsApp Business Account.

    Raises:
        UnsupportedObjectError: Para qualquer outro `object`
    """
    if payload.get("object") != WHATSAPP_BUSINESS_ACCOUNT:
        raise UnsupportedObjectError("Received webhook for non-WhatsApp event")
