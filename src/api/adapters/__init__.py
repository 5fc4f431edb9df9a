"""Adapters de framework HTTP para o WebhookProcessor.

- base: WebhookRequest, construct_full_url e dispatch por método
- starlette_adapter: Starlette/FastAPI (corpo lido do stream ASGI)
- flask_adapter: Flask (corpo pré-parseado + bytes brutos em cache)

O adapter Flask é importado sob demanda (extra opcional `flask`).
"""

from .base import (
    WebhookRequest,
    auto_dispatch,
    construct_full_url,
    dispatch_flow,
    dispatch_get,
    dispatch_post,
    method_not_allowed,
    run_dispatch,
)

__all__ = [
    "WebhookRequest",
    "auto_dispatch",
    "construct_full_url",
    "dispatch_flow",
    "dispatch_get",
    "dispatch_post",
    "method_not_allowed",
    "run_dispatch",
]
