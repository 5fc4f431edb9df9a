"""Requester HTTP especializado para a Graph API (WhatsApp Cloud API).

Estende HttpClient genérico com comportamentos específicos da Meta:
- Authorization Bearer com access_token validado antes do uso
- Endpoints relativos resolvidos contra `{api_base_url}/{api_version}`
- Erros Meta (error.type, error.code) convertidos em GraphApiError
- Logging estruturado sem tokens, números ou payloads
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from .http_base import HttpClient, HttpClientConfig, HttpError
from .meta_errors import GraphApiError, parse_meta_error

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class GraphApiRequester(HttpClient):
    """Executa chamadas autenticadas na Graph API.

    Implementa `RequesterProtocol`.
    """

    def __init__(
        self,
        *,
        access_token: str,
        api_endpoint: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self._access_token = access_token
        self._api_endpoint = api_endpoint.rstrip("/")

    def build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self._api_endpoint}/{endpoint.lstrip('/')}"

    async def send_request(
        self,
        method: str,
        endpoint: str,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Envia request autenticado e retorna o JSON da resposta.

        Args:
            method: Verbo HTTP
            endpoint: Caminho relativo (ex: `{phone_number_id}/messages`) ou URL
            body: Payload JSON (opcional)

        Raises:
            ValueError: Se access_token está vazio
            GraphApiError: Se a Meta responder com `error`
            HttpError: Falha HTTP/rede ou resposta não-JSON
        """
        if not self._access_token or not self._access_token.strip():
            logger.error("graph_api_access_token_missing", extra={"endpoint": endpoint})
            raise ValueError(
                "access_token é obrigatório para chamadas à Graph API. "
                "Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._access_token}",
        }
        response = await self.request(method.upper(), self.build_url(endpoint), json=body, headers=headers)
        return self._process_response(response, method.upper(), endpoint)

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        endpoint: str,
    ) -> dict[str, Any]:
        try:
            response_data = response.json() if response.content else {}
        except json.JSONDecodeError as exc:
            logger.error("graph_api_invalid_json", extra={"endpoint": endpoint})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc

        meta_error = parse_meta_error(response_data, http_status=response.status_code)
        if meta_error is not None:
            _log_meta_error(meta_error, method, endpoint)
            raise meta_error

        if response.status_code >= 400:
            raise HttpError("http_error_status", status_code=response.status_code)

        logger.debug(
            "graph_api_request_succeeded",
            extra={"method": method, "endpoint": endpoint, "status_code": response.status_code},
        )
        return response_data if isinstance(response_data, dict) else {"data": response_data}


def _log_meta_error(meta_error: GraphApiError, method: str, endpoint: str) -> None:
    logger.warning(
        "graph_api_error",
        extra={
            "method": method,
            "endpoint": endpoint,
            "error_type": meta_error.error_type,
            "error_code": meta_error.error_code,
            "is_permanent": meta_error.is_permanent,
        },
    )


def create_graph_api_requester(
    settings: WhatsAppSettings | None = None,
) -> GraphApiRequester:
    """Factory para criar requester com config padrão.

    Args:
        settings: WhatsAppSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_whatsapp_settings

    whatsapp = settings or get_whatsapp_settings()
    config = HttpClientConfig(
        timeout_seconds=whatsapp.request_timeout_seconds,
        max_retries=whatsapp.max_retries,
    )
    return GraphApiRequester(
        access_token=whatsapp.access_token,
        api_endpoint=whatsapp.api_endpoint,
        config=config,
    )
