"""Entrypoint do serviço de webhooks WhatsApp.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080

Handlers são registrados no processador antes de servir tráfego:
    from app.app import create_app
    from app.bootstrap import create_webhook_processor

    processor = create_webhook_processor()
    processor.on_text(handle_text)
    app = create_app(processor)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import create_webhook_processor, initialize_app, validate_runtime_settings
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from app.use_cases.whatsapp import WebhookProcessor

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_TIMEOUT_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (falha rápido em staging/production)

    Shutdown:
    - Aguarda dispatches pendentes do modo async
    - Fecha o pool HTTP do cliente WhatsApp
    """
    service = app.state.service_name
    logger.info("app_starting", extra={"service": service})
    validate_runtime_settings()

    yield

    logger.info("app_shutting_down", extra={"service": service})
    processor: WebhookProcessor = app.state.webhook_processor
    await processor.drain_background_tasks(timeout_seconds=SHUTDOWN_DRAIN_TIMEOUT_SECONDS)
    close = getattr(processor.client, "aclose", None)
    if callable(close):
        await close()


def create_app(processor: WebhookProcessor | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        processor: Processador com handlers registrados; criado a partir
            do ambiente se None.

    Returns:
        Aplicação FastAPI configurada.
    """
    base = get_base_settings()
    fastapi_app = FastAPI(
        title="wa-webhook-engine",
        description="Webhooks e Flows da WhatsApp Cloud API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None if base.is_production else "/docs",
        redoc_url=None,
        openapi_url=None if base.is_production else "/openapi.json",
    )
    fastapi_app.state.service_name = base.service_name
    fastapi_app.state.webhook_processor = processor or create_webhook_processor()

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": base.service_name})
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_starting_dev_mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
