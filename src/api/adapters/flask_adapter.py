"""Adapter Flask.

Flask já parseia o JSON (`get_json`); os bytes originais continuam
disponíveis via `get_data(cache=True)` para a assinatura dos Flows.
Views assíncronas exigem `flask[async]`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Blueprint, Response, request

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
    from flask import Request

    from app.use_cases.whatsapp.webhook_processor import WebhookProcessor
    from app.use_cases.whatsapp.webhook_result import WebhookResult


def to_webhook_request(flask_request: Request) -> WebhookRequest:
    """Converte o request Flask em `WebhookRequest`."""
    headers = normalize_headers(flask_request.headers)
    body = flask_request.get_data(cache=True)
    parsed_body = flask_request.get_json(silent=True) if flask_request.is_json else None
    return WebhookRequest(
        method=flask_request.method.upper(),
        url=construct_full_url(headers, flask_request.full_path.rstrip("?")),
        headers=headers,
        query=flask_request.args.to_dict(flat=True),
        body=body,
        parsed_body=parsed_body if isinstance(parsed_body, dict) else None,
    )


def to_response(result: WebhookResult) -> Response:
    return Response(response=result.body, status=result.status, headers=result.headers)


async def handle_get(processor: WebhookProcessor, flask_request: Request | None = None) -> Response:
    webhook_request = to_webhook_request(flask_request or request)
    return to_response(await run_dispatch(dispatch_get, processor, webhook_request))


async def handle_post(processor: WebhookProcessor, flask_request: Request | None = None) -> Response:
    webhook_request = to_webhook_request(flask_request or request)
    return to_response(await run_dispatch(dispatch_post, processor, webhook_request))


async def handle_flow(processor: WebhookProcessor, flask_request: Request | None = None) -> Response:
    webhook_request = to_webhook_request(flask_request or request)
    return to_response(await run_dispatch(dispatch_flow, processor, webhook_request))


async def auto_route(processor: WebhookProcessor, flask_request: Request | None = None) -> Response:
    webhook_request = to_webhook_request(flask_request or request)
    return to_response(await run_dispatch(auto_dispatch, processor, webhook_request))


def create_blueprint(
    processor: WebhookProcessor,
    *,
    name: str = "whatsapp_webhook",
    url_prefix: str = "/webhook/whatsapp",
) -> Blueprint:
    """Blueprint com `GET/POST /` (webhook) e `POST /flow` (Flows)."""
    blueprint = Blueprint(name, __name__, url_prefix=url_prefix)

    async def webhook() -> Response:
        return await auto_route(processor)

    async def flow() -> Response:
        return await handle_flow(processor)

    blueprint.add_url_rule("/", "webhook", webhook, methods=["GET", "POST"])
    blueprint.add_url_rule("/flow", "flow", flow, methods=["POST"])
    return blueprint
