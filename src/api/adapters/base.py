"""Contrato neutro entre frameworks HTTP e o WebhookProcessor.

Cada adapter converte o request do framework em `WebhookRequest`, chama
uma das funções `dispatch_*` e converte o `WebhookResult` de volta.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from app.observability import CORRELATION_HEADER, correlation_scope
from app.use_cases.whatsapp.webhook_result import WebhookResult

if TYPE_CHECKING:
    from app.use_cases.whatsapp.webhook_processor import WebhookProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WebhookRequest:
    """Request canônico independente de framework.

    Attributes:
        method: Verbo HTTP em maiúsculas
        url: URL completa (ver construct_full_url)
        headers: Headers com nomes em minúsculas
        query: Query string (primeiro valor de cada chave)
        body: Corpo bruto exatamente como recebido
        parsed_body: Corpo já parseado pelo framework, quando houver
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    parsed_body: Any = None

    @property
    def correlation_id(self) -> str | None:
        return self.headers.get(CORRELATION_HEADER) or None


def normalize_headers(headers: Mapping[str, str] | Any) -> dict[str, str]:
    """Copia headers com nomes em minúsculas."""
    return {str(name).lower(): str(value) for name, value in headers.items()}


def construct_full_url(headers: Mapping[str, str], url: str | None = None) -> str:
    """Remonta URL absoluta a partir de `x-forwarded-proto`, `host` e caminho."""
    lowered = normalize_headers(headers)
    protocol = lowered.get("x-forwarded-proto") or "http"
    host = lowered.get("host") or "localhost"
    path = url or "/"
    return f"{protocol}://{host}{path}"


def method_not_allowed() -> WebhookResult:
    return WebhookResult.error(405, "Method Not Allowed")


def internal_error() -> WebhookResult:
    return WebhookResult.error(500, "Internal Server Error")


def with_correlation_header(result: WebhookResult, correlation_id: str) -> WebhookResult:
    headers = {**result.headers, "X-Correlation-Id": correlation_id}
    return WebhookResult(status=result.status, headers=headers, body=result.body)


async def dispatch_get(processor: WebhookProcessor, request: WebhookRequest) -> WebhookResult:
    """GET de verificação: lê `hub.mode`, `hub.verify_token` e `hub.challenge`."""
    return processor.process_verification(
        request.query.get("hub.mode") or None,
        request.query.get("hub.verify_token") or None,
        request.query.get("hub.challenge") or None,
    )


async def dispatch_post(processor: WebhookProcessor, request: WebhookRequest) -> WebhookResult:
    body = request.parsed_body if request.parsed_body is not None else request.body
    return await processor.process_webhook(body)


async def dispatch_flow(processor: WebhookProcessor, request: WebhookRequest) -> WebhookResult:
    # Flow sempre usa o corpo bruto: re-serializar quebra a assinatura
    return await processor.process_flow(request.body, request.headers)


async def auto_dispatch(processor: WebhookProcessor, request: WebhookRequest) -> WebhookResult:
    """Roteia por método: GET → verificação, POST → webhook, demais → 405."""
    if request.method == "GET":
        return await dispatch_get(processor, request)
    if request.method == "POST":
        return await dispatch_post(processor, request)
    return method_not_allowed()


async def run_dispatch(
    dispatch: Any,
    processor: WebhookProcessor,
    request: WebhookRequest,
) -> WebhookResult:
    """Executa o dispatch dentro do escopo de correlation id.

    Falhas inesperadas viram 500 JSON; nada escapa para o framework.
    """
    with correlation_scope(request.correlation_id) as correlation_id:
        try:
            result = await dispatch(processor, request)
        except Exception:
            logger.exception(
                "webhook_adapter_failed",
                extra={"channel": "whatsapp", "method": request.method},
            )
            result = internal_error()
        return with_correlation_header(result, correlation_id)
