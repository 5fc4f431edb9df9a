"""Modelo canônico de eventos do webhook WhatsApp.

Cada mensagem bruta vira uma `CanonicalMessage` imutável com exatamente um
bloco específico do tipo preenchido. Status de entrega viram
`CanonicalStatus`; mudanças de outros campos viram `WebhookFieldEvent`.
Objetos são criados por request e descartados após o dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

WHATSAPP_BUSINESS_ACCOUNT = "whatsapp_business_account"
MESSAGES_FIELD = "messages"
STATUSES_TYPE = "statuses"
WILDCARD = "*"


class MessageType(StrEnum):
    """Tipos de mensagem recebidos pela Cloud API."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    STICKER = "sticker"
    LOCATION = "location"
    CONTACTS = "contacts"
    INTERACTIVE = "interactive"
    BUTTON = "button"
    ORDER = "order"
    SYSTEM = "system"
    REACTION = "reaction"
    TEMPLATE = "template"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"
    ALL = WILDCARD


class WebhookField(StrEnum):
    """Campos de `entry[].changes[].field` além de `messages`."""

    ACCOUNT_UPDATE = "account_update"
    ACCOUNT_REVIEW_UPDATE = "account_review_update"
    ACCOUNT_ALERTS = "account_alerts"
    BUSINESS_CAPABILITY_UPDATE = "business_capability_update"
    PHONE_NUMBER_NAME_UPDATE = "phone_number_name_update"
    PHONE_NUMBER_QUALITY_UPDATE = "phone_number_quality_update"
    MESSAGE_TEMPLATE_STATUS_UPDATE = "message_template_status_update"
    TEMPLATE_CATEGORY_UPDATE = "template_category_update"
    MESSAGE_TEMPLATE_QUALITY_UPDATE = "message_template_quality_update"
    FLOWS = "flows"
    SECURITY = "security"
    HISTORY = "history"
    SMB_MESSAGE_ECHOES = "smb_message_echoes"
    SMB_APP_STATE_SYNC = "smb_app_state_sync"
    ALL = WILDCARD


# Tipos com bloco específico no payload (campo homônimo na mensagem)
PAYLOAD_MESSAGE_TYPES: frozenset[str] = frozenset(
    {
        MessageType.TEXT,
        MessageType.IMAGE,
        MessageType.VIDEO,
        MessageType.AUDIO,
        MessageType.DOCUMENT,
        MessageType.STICKER,
        MessageType.LOCATION,
        MessageType.CONTACTS,
        MessageType.INTERACTIVE,
        MessageType.BUTTON,
        MessageType.ORDER,
        MessageType.SYSTEM,
        MessageType.REACTION,
    }
)


@dataclass(frozen=True, slots=True)
class ChangeMetadata:
    """Metadados comuns a todos os itens de um `change`."""

    waba_id: str = ""
    phone_number_id: str = ""
    display_phone_number: str = ""
    profile_name: str = ""


@dataclass(frozen=True, slots=True)
class CanonicalMessage:
    """Mensagem normalizada entregue aos handlers.

    Attributes:
        id: wamid da mensagem
        from_number: Número do remetente (campo `from` no payload)
        timestamp: Timestamp Unix (string, como enviado pela Meta)
        type: Tipo bruto da mensagem; tipos desconhecidos são preservados
        context: Bloco `context` (reply/forward), se houver
        errors: Lista `errors` (mensagens `unsupported`), se houver
        raw: Mensagem bruta recebida
    """

    id: str
    from_number: str
    timestamp: str
    type: str
    waba_id: str = ""
    phone_number_id: str = ""
    display_phone_number: str = ""
    profile_name: str = ""
    context: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None
    text: dict[str, Any] | None = None
    image: dict[str, Any] | None = None
    video: dict[str, Any] | None = None
    audio: dict[str, Any] | None = None
    document: dict[str, Any] | None = None
    sticker: dict[str, Any] | None = None
    location: dict[str, Any] | None = None
    contacts: list[dict[str, Any]] | None = None
    interactive: dict[str, Any] | None = None
    button: dict[str, Any] | None = None
    order: dict[str, Any] | None = None
    system: dict[str, Any] | None = None
    reaction: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def payload(self) -> Any:
        """Bloco específico do tipo (ou None para tipos sem bloco)."""
        if self.type in PAYLOAD_MESSAGE_TYPES:
            return getattr(self, self.type)
        return None

    @property
    def text_body(self) -> str | None:
        if self.text is None:
            return None
        body = self.text.get("body")
        return body if isinstance(body, str) else None


@dataclass(frozen=True, slots=True)
class CanonicalStatus:
    """Status de entrega (sent/delivered/read/failed)."""

    id: str
    status: str
    timestamp: str
    recipient_id: str = ""
    waba_id: str = ""
    phone_number_id: str = ""
    display_phone_number: str = ""
    conversation: dict[str, Any] | None = None
    pricing: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def type(self) -> str:
        return STATUSES_TYPE


@dataclass(frozen=True, slots=True)
class WebhookFieldEvent:
    """Mudança de um campo diferente de `messages` (account_update, flows, ...)."""

    field: str
    waba_id: str
    value: Any


ChangeKind = Literal["messages", "statuses", "field"]


@dataclass(frozen=True, slots=True)
class NormalizedChange:
    """Resultado da normalização de um único `change`."""

    kind: ChangeKind
    messages: tuple[CanonicalMessage, ...] = ()
    statuses: tuple[CanonicalStatus, ...] = ()
    event: WebhookFieldEvent | None = None
