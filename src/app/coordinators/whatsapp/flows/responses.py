"""Respostas padrão do endpoint de Flows."""

from __future__ import annotations

from typing import Any

from app.domain.flow_request import FLOW_PROTOCOL_VERSION


def create_ping_response() -> dict[str, Any]:
    """Health check da Meta: `{"version": "3.0", "data": {"status": "active"}}`."""
    return {"version": FLOW_PROTOCOL_VERSION, "data": {"status": "active"}}


def create_error_ack_response() -> dict[str, Any]:
    """Confirmação de recebimento de notificação de erro."""
    return {}


def normalize_handler_result(result: Any) -> Any:
    # Handler sem retorno responde objeto vazio
    return {} if result is None else result
