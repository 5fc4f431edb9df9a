"""Helpers de extração de campos do payload WhatsApp.

Separado de extractor.py para manter SRP.
Cada função lê um pedaço do `change.value` sem validar regra de negócio.
"""

from __future__ import annotations

from typing import Any

from app.domain.webhook_events import (
    PAYLOAD_MESSAGE_TYPES,
    CanonicalStatus,
    ChangeMetadata,
    MessageType,
)


def as_str(value: Any) -> str:
    """Converte ids/timestamps para string (a Meta às vezes envia números)."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def as_dict(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def as_list_of_dicts(value: Any) -> list[dict[str, Any]] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, dict)]


def extract_profile_name(value: dict[str, Any]) -> str:
    """Extrai `contacts[0].profile.name` (vazio se ausente)."""
    contacts = value.get("contacts") or []
    if not isinstance(contacts, list) or not contacts or not isinstance(contacts[0], dict):
        return ""
    profile = contacts[0].get("profile") or {}
    if not isinstance(profile, dict):
        return ""
    return as_str(profile.get("name"))


def extract_metadata(value: dict[str, Any], waba_id: str) -> ChangeMetadata:
    """Extrai metadados do número receptor e nome do perfil do remetente."""
    metadata = as_dict(value.get("metadata")) or {}
    return ChangeMetadata(
        waba_id=waba_id,
        phone_number_id=as_str(metadata.get("phone_number_id")),
        display_phone_number=as_str(metadata.get("display_phone_number")),
        profile_name=extract_profile_name(value),
    )


def extract_type_block(msg: dict[str, Any], message_type: str) -> dict[str, Any]:
    """Retorna kwargs com o único bloco específico do tipo preenchido.

    Tipos desconhecidos (ou sem bloco, como `unsupported`) retornam vazio.
    """
    if message_type not in PAYLOAD_MESSAGE_TYPES:
        return {}
    if message_type == MessageType.CONTACTS:
        block = as_list_of_dicts(msg.get(message_type))
    else:
        block = as_dict(msg.get(message_type))
    if block is None:
        return {}
    return {message_type: block}


def build_status(raw_status: dict[str, Any], metadata: ChangeMetadata) -> CanonicalStatus:
    """Converte um item de `value.statuses` em `CanonicalStatus`."""
    return CanonicalStatus(
        id=as_str(raw_status.get("id")),
        status=as_str(raw_status.get("status")),
        timestamp=as_str(raw_status.get("timestamp")),
        recipient_id=as_str(raw_status.get("recipient_id")),
        waba_id=metadata.waba_id,
        phone_number_id=metadata.phone_number_id,
        display_phone_number=metadata.display_phone_number,
        conversation=as_dict(raw_status.get("conversation")),
        pricing=as_dict(raw_status.get("pricing")),
        errors=as_list_of_dicts(raw_status.get("errors")),
        raw=raw_status,
    )
