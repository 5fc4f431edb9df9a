"""Testes do contrato neutro de adapters (WebhookRequest → WebhookResult)."""

from __future__ import annotations

import json

import pytest

from api.adapters import (
    WebhookRequest,
    auto_dispatch,
    construct_full_url,
    dispatch_flow,
    run_dispatch,
    starlette_adapter,
)
from app.use_cases.whatsapp import WebhookProcessor
from config.settings import WhatsAppSettings
from tests.fakes.asgi_requests import build_request
from tests.fakes.fake_whatsapp_client import FakeWhatsAppClient


def _processor() -> WebhookProcessor:
    return WebhookProcessor(WhatsAppSettings(verify_token="token"), FakeWhatsAppClient())


class TestConstructFullUrl:
    def test_uses_forwarded_proto_and_host(self) -> None:
        headers = {"X-Forwarded-Proto": "https", "Host": "hooks.example.com"}

        assert construct_full_url(headers, "/webhook?x=1") == "https://hooks.example.com/webhook?x=1"

    def test_defaults(self) -> None:
        assert construct_full_url({}) == "http://localhost/"


class TestAutoDispatch:
    @pytest.mark.asyncio
    async def test_get_routes_to_verification(self) -> None:
        request = WebhookRequest(
            method="GET",
            url="http://localhost/",
            query={"hub.mode": "subscribe", "hub.verify_token": "token", "hub.challenge": "42"},
        )

        result = await auto_dispatch(_processor(), request)

        assert result.status == 200
        assert result.body == "42"

    @pytest.mark.asyncio
    async def test_post_prefers_parsed_body(self) -> None:
        request = WebhookRequest(
            method="POST",
            url="http://localhost/",
            body=b"not json at all",
            parsed_body={"object": "page", "entry": []},
        )

        result = await auto_dispatch(_processor(), request)

        assert result.status == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH"])
    async def test_other_methods_are_not_allowed(self, method: str) -> None:
        result = await auto_dispatch(_processor(), WebhookRequest(method=method, url="/"))

        assert result.status == 405
        assert result.json_body() == {"error": "Method Not Allowed"}


class TestRunDispatch:
    @pytest.mark.asyncio
    async def test_generates_correlation_id_when_missing(self) -> None:
        result = await run_dispatch(auto_dispatch, _processor(), WebhookRequest(method="PUT", url="/"))

        assert result.headers["X-Correlation-Id"]

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_internal_error(self) -> None:
        async def _boom(processor, request):
            raise RuntimeError("boom")

        request = WebhookRequest(method="POST", url="/", headers={"x-correlation-id": "c-9"})

        result = await run_dispatch(_boom, _processor(), request)

        assert result.status == 500
        assert json.loads(result.body) == {"error": "Internal Server Error"}
        assert result.headers["X-Correlation-Id"] == "c-9"

    @pytest.mark.asyncio
    async def test_flow_dispatch_forwards_raw_body_and_headers(self) -> None:
        seen = {}

        class _Processor:
            async def process_flow(self, raw_body, headers):
                seen["body"] = raw_body
                seen["headers"] = headers
                return await _processor().process_webhook(b"")

        request = WebhookRequest(
            method="POST",
            url="/flow",
            headers={"x-hub-signature-256": "sha256=abc"},
            body=b'{"a": 1}',
            parsed_body={"a": 1},
        )

        await dispatch_flow(_Processor(), request)

        assert seen == {"body": b'{"a": 1}', "headers": {"x-hub-signature-256": "sha256=abc"}}


class TestStarletteAdapter:
    @pytest.mark.asyncio
    async def test_to_webhook_request(self) -> None:
        request = build_request(
            method="POST",
            path="/webhook/whatsapp/",
            query_string="a=1",
            body=b'{"object": "x"}',
            headers={"Host": "api.example.com", "X-Forwarded-Proto": "https"},
        )

        webhook_request = await starlette_adapter.to_webhook_request(request)

        assert webhook_request.method == "POST"
        assert webhook_request.url == "https://api.example.com/webhook/whatsapp/?a=1"
        assert webhook_request.query == {"a": "1"}
        assert webhook_request.body == b'{"object": "x"}'
        assert webhook_request.headers["host"] == "api.example.com"

    @pytest.mark.asyncio
    async def test_auto_route_method_not_allowed(self) -> None:
        response = await starlette_adapter.auto_route(_processor(), build_request(method="PUT"))

        assert response.status_code == 405
