"""Factory de wiring para WhatsApp (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp import WhatsAppClient, create_graph_api_requester
from app.coordinators.whatsapp.inbound import BackgroundTasks, HandlerRegistry
from app.use_cases.whatsapp import WebhookProcessor
from config.settings import get_whatsapp_settings

if TYPE_CHECKING:
    from config.settings import WhatsAppSettings


def create_whatsapp_client(settings: WhatsAppSettings | None = None) -> WhatsAppClient:
    """Cria cliente WhatsApp sobre o requester httpx da Graph API."""
    whatsapp = settings or get_whatsapp_settings()
    return WhatsAppClient(create_graph_api_requester(whatsapp), whatsapp)


def create_webhook_processor(
    settings: WhatsAppSettings | None = None,
    *,
    client: Any | None = None,
    registry: HandlerRegistry | None = None,
) -> WebhookProcessor:
    """Cria processador com registry vazio pronto para registro de handlers.

    Args:
        settings: WhatsAppSettings; carrega do ambiente se None
        client: Cliente entregue aos handlers; cria WhatsAppClient se None
        registry: Registry pré-populado (opcional)
    """
    whatsapp = settings or get_whatsapp_settings()
    return WebhookProcessor(
        settings=whatsapp,
        client=client if client is not None else create_whatsapp_client(whatsapp),
        registry=registry or HandlerRegistry(),
        background=BackgroundTasks(),
    )
