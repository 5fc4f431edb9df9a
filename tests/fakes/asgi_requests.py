"""Construção de `starlette.requests.Request` a partir de um scope ASGI."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from starlette.requests import Request


def build_request(
    *,
    method: str,
    path: str = "/",
    query_string: str = "",
    body: bytes = b"",
    headers: dict[str, str] | None = None,
    state: SimpleNamespace | None = None,
) -> Request:
    header_items = headers or {}
    raw_headers = [(k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in header_items.items()]
    scope: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }
    if state is not None:
        scope["app"] = SimpleNamespace(state=state)
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)
