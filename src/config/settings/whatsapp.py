"""Settings específicas de WhatsApp.

Configurações do webhook, do endpoint de Flows e do cliente Graph API.
Carregadas uma vez no startup e tratadas como somente-leitura durante o tráfego.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "v24.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"

PROCESSING_MODES = ("inline", "async")

# Cabeçalho comum a PKCS#1 e PKCS#8 (criptografada ou não)
PEM_PRIVATE_KEY_MARKER = "PRIVATE KEY-----"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        verify_token: Token para verificação do webhook (hub.verify_token)
        app_secret: Secret do app Meta para validação HMAC (X-Hub-Signature-256)
        access_token: Token de acesso à Graph API
        phone_number_id: ID do número de telefone no Meta Business
        business_account_id: ID da conta de negócios (WABA)
        flow_private_key: Chave privada RSA (PEM) do endpoint de Flows
        flow_private_key_passphrase: Passphrase da chave privada (opcional)
        api_version: Versão da Graph API (ex: v24.0)
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro transitório
        webhook_processing_mode: Política de dispatch dos handlers (inline|async)
    """

    # Credenciais (carregadas de env ou Secret Manager)
    verify_token: str = ""
    app_secret: str = ""
    access_token: str = ""
    phone_number_id: str = ""
    business_account_id: str = ""

    # Flows (criptografia RSA/AES)
    flow_private_key: str = ""
    flow_private_key_passphrase: str = ""

    # API
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL

    # Timeouts e retries
    request_timeout_seconds: float = 30.0
    max_retries: int = 3

    # Webhook processing
    webhook_processing_mode: str = "inline"

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    @property
    def flow_signature_secret(self) -> str:
        """Secret usado no HMAC do endpoint de Flows.

        Usa `app_secret` quando configurado; caso contrário cai no
        `verify_token`, que é o comportamento legado do protocolo.
        """
        return self.app_secret or self.verify_token

    @property
    def uses_signature_fallback(self) -> bool:
        """True quando o HMAC de Flows está usando o verify_token."""
        return not self.app_secret and bool(self.verify_token)

    @property
    def flows_enabled(self) -> bool:
        return bool(self.flow_private_key)

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.verify_token:
            errors.append("WHATSAPP_VERIFY_TOKEN não configurado")

        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")

        if self.flows_enabled and PEM_PRIVATE_KEY_MARKER not in self.flow_private_key:
            errors.append("WHATSAPP_FLOW_PRIVATE_KEY não está em formato PEM")

        if self.flow_private_key_passphrase and not self.flows_enabled:
            errors.append(
                "WHATSAPP_FLOW_PRIVATE_KEY_PASSPHRASE definido sem WHATSAPP_FLOW_PRIVATE_KEY"
            )

        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("WHATSAPP_MAX_RETRIES deve ser >= 0")

        if self.webhook_processing_mode not in PROCESSING_MODES:
            errors.append(
                "WHATSAPP_WEBHOOK_PROCESSING_MODE deve ser 'inline' ou 'async'"
            )

        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        verify_token=os.getenv("WHATSAPP_VERIFY_TOKEN", ""),
        app_secret=os.getenv("WHATSAPP_APP_SECRET", ""),
        access_token=os.getenv("WHATSAPP_ACCESS_TOKEN", ""),
        phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID", ""),
        business_account_id=os.getenv("WHATSAPP_BUSINESS_ACCOUNT_ID", ""),
        flow_private_key=os.getenv("WHATSAPP_FLOW_PRIVATE_KEY", ""),
        flow_private_key_passphrase=os.getenv("WHATSAPP_FLOW_PRIVATE_KEY_PASSPHRASE", ""),
        api_version=os.getenv("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")
        ),
        max_retries=int(os.getenv("WHATSAPP_MAX_RETRIES", "3")),
        webhook_processing_mode=os.getenv(
            "WHATSAPP_WEBHOOK_PROCESSING_MODE", "inline"
        ).lower(),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
