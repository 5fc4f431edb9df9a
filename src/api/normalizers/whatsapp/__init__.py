"""Normalizer WhatsApp — extração do webhook para o modelo canônico.

Responsabilidades:
- Percorrer entries/changes do webhook WhatsApp Business API
- Produzir CanonicalMessage, CanonicalStatus e WebhookFieldEvent
- Preservar tipos desconhecidos sem falhar

Tipos com bloco específico: text, image, video, audio, document, sticker,
location, contacts, interactive, button, order, system, reaction.
"""

from .extractor import (
    KNOWN_MESSAGE_TYPES,
    build_message,
    extract_payload_changes,
    iter_entry_changes,
    normalize_change,
)

__all__ = [
    "KNOWN_MESSAGE_TYPES",
    "build_message",
    "extract_payload_changes",
    "iter_entry_changes",
    "normalize_change",
]
