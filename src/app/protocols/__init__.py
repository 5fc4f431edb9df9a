"""Protocolos e contratos do core da aplicação."""

from .requester import RequesterProtocol, WhatsAppClientProtocol

__all__ = [
    "RequesterProtocol",
    "WhatsAppClientProtocol",
]
