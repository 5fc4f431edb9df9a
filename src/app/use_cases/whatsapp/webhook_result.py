"""Resultado neutro de framework: `{status, headers, body}`."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"


@dataclass(frozen=True, slots=True)
class WebhookResult:
    """Contrato entre o processador e todo adapter de framework."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @classmethod
    def json(cls, status: int, payload: Any) -> WebhookResult:
        return cls(
            status=status,
            headers={"Content-Type": JSON_CONTENT_TYPE},
            body=json.dumps(payload, ensure_ascii=False),
        )

    @classmethod
    def text(cls, status: int, body: str) -> WebhookResult:
        return cls(status=status, headers={"Content-Type": TEXT_CONTENT_TYPE}, body=body)

    @classmethod
    def error(cls, status: int, message: str) -> WebhookResult:
        return cls.json(status, {"error": message})

    @classmethod
    def empty(cls, status: int = 200) -> WebhookResult:
        return cls(status=status)

    @property
    def content_type(self) -> str | None:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return None

    def json_body(self) -> Any:
        """Decodifica o corpo JSON (None para corpo vazio)."""
        return json.loads(self.body) if self.body else None
