"""Acesso ao WebhookProcessor registrado no app."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starlette.requests import Request

    from app.use_cases.whatsapp import WebhookProcessor


def get_webhook_processor(request: Request) -> WebhookProcessor:
    """Retorna o processador guardado em `app.state` pelo create_app.

    Raises:
        RuntimeError: Se o app não foi criado com um processador
    """
    processor = getattr(request.app.state, "webhook_processor", None)
    if processor is None:
        raise RuntimeError("webhook_processor não configurado em app.state")
    return processor
