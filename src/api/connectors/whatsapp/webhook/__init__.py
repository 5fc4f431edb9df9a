"""Webhook WhatsApp: verificação do challenge e parsing do envelope."""

from .receive import (
    InvalidJsonError,
    UnsupportedObjectError,
    WebhookRequestError,
    ensure_business_account,
    parse_webhook_body,
)
from .verify import HubChallenge, WebhookChallengeError, verify_webhook_challenge

__all__ = [
    "HubChallenge",
    "InvalidJsonError",
    "UnsupportedObjectError",
    "WebhookChallengeError",
    "WebhookRequestError",
    "ensure_business_account",
    "parse_webhook_body",
    "verify_webhook_challenge",
]
