"""Assinatura HMAC-SHA256 (X-Hub-Signature-256) dos requests da Meta."""

from __future__ import annotations

import hashlib
import hmac

from .constants import SIGNATURE_PREFIX


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def generate_signature(payload: str | bytes, secret: str | bytes) -> str:
    """Gera o valor do header no formato `sha256=<hex>`."""
    digest = hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(
    payload: bytes,
    signature: str | None,
    secret: str | bytes,
) -> bool:
    """Valida assinatura HMAC-SHA256 sobre o corpo bruto.

    Nunca levanta exceção: header ausente, secret vazio ou divergência
    retornam False.

    Args:
        payload: Corpo bruto da requisição, exatamente como recebido
        signature: Header X-Hub-Signature-256
        secret: Secret configurado

    Returns:
        True se assinatura válida
    """
    if not signature or not secret:
        return False
    if not signature.startswith(SIGNATURE_PREFIX):
        return False

    expected = generate_signature(payload, secret)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
