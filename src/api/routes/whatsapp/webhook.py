"""Endpoints do webhook WhatsApp.

- GET  /  → verificação do challenge (hub.mode/hub.verify_token/hub.challenge)
- POST /  → eventos (mensagens, status, demais campos)
"""

from __future__ import annotations

from fastapi import APIRouter, Request, Response

from api.adapters import starlette_adapter
from api.routes.whatsapp.dependencies import get_webhook_processor

router = APIRouter()


@router.get("/")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook — responde ao challenge da Meta.

    Returns:
        Texto do challenge ou erro 403.
    """
    return await starlette_adapter.handle_get(get_webhook_processor(request), request)


@router.post("/")
async def receive_webhook(request: Request) -> Response:
    """Recebe eventos do webhook; responde 200 mesmo com falhas de handler."""
    return await starlette_adapter.handle_post(get_webhook_processor(request), request)
