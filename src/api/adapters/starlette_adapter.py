"""Adapter Starlette/FastAPI.

O corpo é lido do stream ASGI (`await request.body()`), preservando os bytes
exatos para a verificação de assinatura.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import Response

from .base import (
    WebhookRequest,
    auto_dispatch,
    construct_full_url,
    dispatch_flow,
    dispatch_get,
    dispatch_post,
    normalize_headers,
    run_dispatch,
)

if TYPE_CHECKING:
    from starlette.requests import Request

    from app.use_cases.whatsapp.webhook_processor import WebhookProcessor
    from app.use_cases.whatsapp.webhook_result import WebhookResult


async def to_webhook_request(request: Request) -> WebhookRequest:
    """Converte `starlette.requests.Request` em `WebhookRequest`."""
    body = await request.body() if request.method != "GET" else b""
    headers = normalize_headers(request.headers)
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return WebhookRequest(
        method=request.method.upper(),
        url=construct_full_url(headers, path),
        headers=headers,
        query=dict(request.query_params),
        body=body,
    )


def to_response(result: WebhookResult) -> Response:
    return Response(content=result.body, status_code=result.status, headers=result.headers)


async def handle_get(processor: WebhookProcessor, request: Request) -> Response:
    webhook_request = await to_webhook_request(request)
    return to_response(await run_dispatch(dispatch_get, processor, webhook_request))


async def handle_post(processor: WebhookProcessor, request: Request) -> Response:
    webhook_request = await to_webhook_request(request)
    return to_response(await run_dispatch(dispatch_post, processor, webhook_request))


async def handle_flow(processor: WebhookProcessor, request: Request) -> Response:
    webhook_request = await to_webhook_request(request)
    return to_response(await run_dispatch(dispatch_flow, processor, webhook_request))


async def auto_route(processor: WebhookProcessor, request: Request) -> Response:
    webhook_request = await to_webhook_request(request)
    return to_response(await run_dispatch(auto_dispatch, processor, webhook_request))
