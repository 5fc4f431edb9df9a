"""Extrator de payloads WhatsApp Business API.

Responsabilidades:
- Percorrer `entry[].changes[]` do webhook
- Converter mensagens em `CanonicalMessage` e status em `CanonicalStatus`
- Encaminhar campos diferentes de `messages` como `WebhookFieldEvent`

Não faz validação de negócio - apenas extração estrutural.
Tipos de mensagem desconhecidos nunca levantam exceção.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from app.domain.webhook_events import (
    MESSAGES_FIELD,
    CanonicalMessage,
    CanonicalStatus,
    ChangeMetadata,
    MessageType,
    NormalizedChange,
    WebhookFieldEvent,
)

from ._extraction_helpers import (
    as_dict,
    as_list_of_dicts,
    as_str,
    build_status,
    extract_metadata,
    extract_type_block,
)

logger = logging.getLogger(__name__)

KNOWN_MESSAGE_TYPES = frozenset(t.value for t in MessageType if t is not MessageType.ALL)


def build_message(msg: dict[str, Any], metadata: ChangeMetadata) -> CanonicalMessage:
    """Converte uma mensagem bruta em `CanonicalMessage`."""
    message_type = as_str(msg.get("type")) or MessageType.UNKNOWN.value
    if message_type not in KNOWN_MESSAGE_TYPES:
        logger.info(
            "unsupported_message_type_received",
            extra={"message_type": message_type},
        )

    return CanonicalMessage(
        id=as_str(msg.get("id")),
        from_number=as_str(msg.get("from")),
        timestamp=as_str(msg.get("timestamp")),
        type=message_type,
        waba_id=metadata.waba_id,
        phone_number_id=metadata.phone_number_id,
        display_phone_number=metadata.display_phone_number,
        profile_name=metadata.profile_name,
        context=as_dict(msg.get("context")),
        errors=as_list_of_dicts(msg.get("errors")),
        raw=msg,
        **extract_type_block(msg, message_type),
    )


def normalize_change(change: dict[str, Any], waba_id: str) -> NormalizedChange:
    """Normaliza um `change` do webhook.

    `statuses` e `messages` são mutuamente exclusivos: se houver status,
    as mensagens do mesmo `value` são ignoradas.
    """
    field = as_str(change.get("field"))
    value = change.get("value")

    if field != MESSAGES_FIELD:
        return NormalizedChange(
            kind="field",
            event=WebhookFieldEvent(field=field, waba_id=waba_id, value=value),
        )

    value = as_dict(value) or {}
    metadata = extract_metadata(value, waba_id)

    raw_statuses = as_list_of_dicts(value.get("statuses"))
    if raw_statuses:
        statuses: tuple[CanonicalStatus, ...] = tuple(
            build_status(raw_status, metadata) for raw_status in raw_statuses
        )
        return NormalizedChange(kind="statuses", statuses=statuses)

    raw_messages = as_list_of_dicts(value.get("messages")) or []
    messages = tuple(build_message(msg, metadata) for msg in raw_messages)
    return NormalizedChange(kind="messages", messages=messages)


def iter_entry_changes(entry: dict[str, Any]) -> Iterator[NormalizedChange]:
    """Itera os changes normalizados de uma `entry`."""
    waba_id = as_str(entry.get("id"))
    for change in as_list_of_dicts(entry.get("changes")) or []:
        yield normalize_change(change, waba_id)


def extract_payload_changes(payload: dict[str, Any]) -> list[NormalizedChange]:
    """Normaliza todo o envelope (todas as entries)."""
    changes: list[NormalizedChange] = []
    for entry in as_list_of_dicts(payload.get("entry")) or []:
        changes.extend(iter_entry_changes(entry))
    return changes
