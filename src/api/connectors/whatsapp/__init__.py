"""Conector WhatsApp - adapter de borda para Meta Graph API.

Responsabilidades:
- Webhook (verificação do challenge, parsing do envelope)
- Requester HTTP para Graph API (retry/backoff, erros Meta)
- Cliente WhatsApp entregue aos handlers
"""

from .client import WhatsAppClient
from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import GraphApiRequester, create_graph_api_requester
from .meta_errors import GraphApiError, is_permanent_error, parse_meta_error

__all__ = [
    "GraphApiError",
    "GraphApiRequester",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "WhatsAppClient",
    "create_graph_api_requester",
    "is_permanent_error",
    "parse_meta_error",
]
