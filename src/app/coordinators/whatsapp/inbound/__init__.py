"""Registry e dispatch de handlers para eventos inbound do WhatsApp."""

from .background import BackgroundTasks
from .dispatcher import HandlerDispatcher, invoke_handler
from .registry import FlowHandler, Handler, HandlerRegistry

__all__ = [
    "BackgroundTasks",
    "FlowHandler",
    "Handler",
    "HandlerDispatcher",
    "HandlerRegistry",
    "invoke_handler",
]
