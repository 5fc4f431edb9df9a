"""Decodificação base64 tolerante a padding ausente e alfabeto urlsafe."""

from __future__ import annotations

import base64
import binascii
import re

from .errors import FlowPayloadError

_URLSAFE_PATTERN = re.compile(r"[A-Za-z0-9_\-]+={0,2}")


def decode_base64(raw_value: str, field: str = "payload") -> bytes:
    """Decodifica base64 padrão ou urlsafe.

    Raises:
        FlowPayloadError: Se o valor não for base64 válido.
    """
    if not isinstance(raw_value, str):
        raise FlowPayloadError(f"Invalid base64 {field}: expected string")
    value = raw_value.strip()
    padded = value + ("=" * (-len(value) % 4))
    try:
        return base64.b64decode(padded, validate=True)
    except (ValueError, binascii.Error):
        # urlsafe só para entradas que usam exclusivamente esse alfabeto
        if not _URLSAFE_PATTERN.fullmatch(value):
            raise FlowPayloadError(
                f"Invalid base64 {field}: invalid characters in input"
            ) from None
        try:
            return base64.urlsafe_b64decode(padded)
        except (ValueError, binascii.Error) as exc:
            raise FlowPayloadError(f"Invalid base64 {field}: {exc}") from exc
