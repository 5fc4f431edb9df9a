"""Modelos de domínio (eventos canônicos e requests de Flow)."""

from .flow_request import (
    FLOW_PROTOCOL_VERSION,
    FlowAction,
    FlowEndpointRequest,
    FlowType,
)
from .webhook_events import (
    MESSAGES_FIELD,
    STATUSES_TYPE,
    WHATSAPP_BUSINESS_ACCOUNT,
    WILDCARD,
    CanonicalMessage,
    CanonicalStatus,
    ChangeMetadata,
    MessageType,
    NormalizedChange,
    WebhookField,
    WebhookFieldEvent,
)

__all__ = [
    "FLOW_PROTOCOL_VERSION",
    "MESSAGES_FIELD",
    "STATUSES_TYPE",
    "WHATSAPP_BUSINESS_ACCOUNT",
    "WILDCARD",
    "CanonicalMessage",
    "CanonicalStatus",
    "ChangeMetadata",
    "FlowAction",
    "FlowEndpointRequest",
    "FlowType",
    "MessageType",
    "NormalizedChange",
    "WebhookField",
    "WebhookFieldEvent",
]
