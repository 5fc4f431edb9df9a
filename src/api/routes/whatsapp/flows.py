"""Endpoint de WhatsApp Flows (data exchange criptografado)."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from api.adapters import starlette_adapter
from api.routes.whatsapp.dependencies import get_webhook_processor

router = APIRouter()


@router.post("/flow")
async def flow_data_exchange(request: Request) -> Response:
    """Recebe request criptografado de Flow.

    Responde JSON para ping/erro e base64 (text/plain) para data_exchange.
    """
    return await starlette_adapter.handle_flow(get_webhook_processor(request), request)
