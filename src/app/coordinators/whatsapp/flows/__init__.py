"""Coordenação do endpoint de WhatsApp Flows (classificação e respostas)."""

from .classifier import (
    classify_flow_request,
    is_data_exchange_request,
    is_error_request,
    is_ping_request,
)
from .responses import (
    create_error_ack_response,
    create_ping_response,
    normalize_handler_result,
)

__all__ = [
    "classify_flow_request",
    "create_error_ack_response",
    "create_ping_response",
    "is_data_exchange_request",
    "is_error_request",
    "is_ping_request",
    "normalize_handler_result",
]
