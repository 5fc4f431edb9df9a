"""Request descriptografado do endpoint de WhatsApp Flows."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

FLOW_PROTOCOL_VERSION = "3.0"
SUCCESS_SCREEN = "SUCCESS"


class FlowType(StrEnum):
    """Chaves de registro de handlers de Flow."""

    ALL = "*"
    PING = "ping"
    ERROR = "error"
    CHANGE = "data_exchange"


class FlowAction(StrEnum):
    """Valores de `action` enviados pela Meta."""

    INIT = "INIT"
    BACK = "BACK"
    DATA_EXCHANGE = "data_exchange"
    PING = "ping"


@dataclass(frozen=True, slots=True)
class FlowEndpointRequest:
    """Corpo descriptografado de um request de Flow.

    Nunca deve ser logado em texto puro.
    """

    version: str | None
    action: str | None
    screen: str | None = None
    data: Any = None
    flow_token: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> FlowEndpointRequest:
        """Constrói a partir do JSON descriptografado, sem validar formato."""

        def _str_or_none(key: str) -> str | None:
            value = payload.get(key)
            return value if isinstance(value, str) else None

        return cls(
            version=_str_or_none("version"),
            action=_str_or_none("action"),
            screen=_str_or_none("screen"),
            data=payload.get("data"),
            flow_token=_str_or_none("flow_token"),
            raw=dict(payload),
        )
