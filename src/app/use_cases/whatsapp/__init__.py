"""Use cases específicos de WhatsApp."""

from .flow_exchange import FLOW_ERROR_STATUS, FlowExchangeProcessor
from .webhook_processor import WebhookProcessor
from .webhook_result import WebhookResult

__all__ = [
    "FLOW_ERROR_STATUS",
    "FlowExchangeProcessor",
    "WebhookProcessor",
    "WebhookResult",
]
