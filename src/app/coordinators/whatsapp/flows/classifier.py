"""Classificação do request descriptografado de Flow.

Ordem: ping → error → data_exchange. Uma notificação de erro também tem
formato de data_exchange, por isso é testada antes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.flow_request import (
    FLOW_PROTOCOL_VERSION,
    SUCCESS_SCREEN,
    FlowAction,
    FlowType,
)

DATA_EXCHANGE_ACTIONS = frozenset(
    {FlowAction.DATA_EXCHANGE, FlowAction.INIT, FlowAction.BACK}
)
ERROR_ACTIONS = frozenset({FlowAction.DATA_EXCHANGE, FlowAction.INIT})


def _has_flow_token(payload: Mapping[str, Any]) -> bool:
    return isinstance(payload.get("flow_token"), str) and isinstance(payload.get("action"), str)


def is_ping_request(payload: Mapping[str, Any]) -> bool:
    return payload.get("action") == FlowAction.PING


def is_error_request(payload: Mapping[str, Any]) -> bool:
    """Notificação de erro: screen obrigatória e data com error_key, error e error_message.

    Sem `error_key`, um formulário com campos `error`/`error_message` segue
    como data_exchange.
    """
    if not _has_flow_token(payload):
        return False
    if payload.get("action") not in ERROR_ACTIONS:
        return False
    if not isinstance(payload.get("screen"), str):
        return False

    data = payload.get("data")
    if not isinstance(data, Mapping):
        return False
    return (
        "error_key" in data
        and isinstance(data.get("error"), str)
        and isinstance(data.get("error_message"), str)
    )


def is_data_exchange_request(payload: Mapping[str, Any]) -> bool:
    """Data exchange: versão 3.0, screen diferente de SUCCESS, data como objeto.

    `data` só é opcional quando action é `data_exchange`.
    """
    if not _has_flow_token(payload):
        return False

    action = payload.get("action")
    if action not in DATA_EXCHANGE_ACTIONS:
        return False
    if payload.get("version") != FLOW_PROTOCOL_VERSION:
        return False

    if "screen" in payload:
        screen = payload["screen"]
        if not isinstance(screen, str) or screen == SUCCESS_SCREEN:
            return False

    return action == FlowAction.DATA_EXCHANGE or isinstance(payload.get("data"), Mapping)


def classify_flow_request(payload: Mapping[str, Any]) -> FlowType | None:
    """Retorna o FlowType do request ou None para formatos desconhecidos."""
    if is_ping_request(payload):
        return FlowType.PING
    if is_error_request(payload):
        return FlowType.ERROR
    if is_data_exchange_request(payload):
        return FlowType.CHANGE
    return None
