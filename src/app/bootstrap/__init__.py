"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta as implementações concretas (requester httpx, cliente WhatsApp)
ao WebhookProcessor.

Uso:
    from app.bootstrap import initialize_app, create_webhook_processor

    # Na inicialização do serviço
    initialize_app()

    processor = create_webhook_processor()
    processor.on_text(handle_text)
"""

from __future__ import annotations

import logging

from app.infra.crypto import FlowKeyMismatchError, load_private_key
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_whatsapp_settings

from .whatsapp_factory import create_webhook_processor, create_whatsapp_client

# Nome do serviço para logs
SERVICE_NAME = "wa_webhook_engine"

logger = logging.getLogger(__name__)

__all__ = [
    "SERVICE_NAME",
    "create_webhook_processor",
    "create_whatsapp_client",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Inicializa a aplicação com as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.

    Configura:
    - Logging estruturado JSON com correlation_id
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name or SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (nível DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        RuntimeError: Em ambiente estrito com configuração inválida
    """
    base = get_base_settings()
    whatsapp = get_whatsapp_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"whatsapp: {error}" for error in whatsapp.validate())

    if whatsapp.flows_enabled:
        try:
            load_private_key(
                whatsapp.flow_private_key,
                whatsapp.flow_private_key_passphrase or None,
            )
        except FlowKeyMismatchError:
            errors.append("flows: WHATSAPP_FLOW_PRIVATE_KEY inválida ou passphrase incorreta")

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
