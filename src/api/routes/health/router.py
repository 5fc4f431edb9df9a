"""Endpoints de health check."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"
    flows_enabled: bool = False
    processing_mode: str = "inline"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness: verifica se o serviço está rodando."""
    processor = getattr(request.app.state, "webhook_processor", None)
    settings = processor.settings if processor is not None else None
    return HealthResponse(
        status="healthy",
        service=getattr(request.app.state, "service_name", "wa-webhook-engine"),
        timestamp=datetime.now(UTC).isoformat(),
        flows_enabled=bool(settings and settings.flows_enabled),
        processing_mode=processor.processing_mode if processor is not None else "inline",
    )
