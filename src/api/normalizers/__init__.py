"""Normalizers — conversão de payloads externos para modelos internos.

Estrutura:
- whatsapp/: normalizer WhatsApp Business API (mensagens, status, eventos)
"""

from .whatsapp import extract_payload_changes, normalize_change

__all__ = [
    "extract_payload_changes",
    "normalize_change",
]
