"""Filters de logging para injeção de contexto e proteção de dados.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: wa_webhook_engine)

Campos mascarados (quando presentes em `extra`):
- números WhatsApp (wa_id, from_number, recipient_id): apenas 4 últimos dígitos
- credenciais (access_token, flow_token, ...): substituídas por [REDACTED]
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

PHONE_LOG_KEYS: Final = frozenset({"wa_id", "from_number", "recipient_id", "display_phone_number"})
SECRET_LOG_KEYS: Final = frozenset(
    {"access_token", "app_secret", "verify_token", "flow_token", "passphrase"}
)
REDACTED: Final = "[REDACTED]"

_NON_DIGITS = re.compile(r"\D")


def mask_phone(value: str) -> str:
    """Mantém só os 4 últimos dígitos: "5511987654321" -> "***4321"."""
    digits = _NON_DIGITS.sub("", value)
    if len(digits) <= 4:
        return "[PHONE]"
    return f"***{digits[-4:]}"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record (nunca descarta)."""
        # correlation_id explícito via `extra` vence o do contexto
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class SensitiveDataFilter(logging.Filter):
    """Mascara telefones e credenciais passados via `extra` (nunca descarta)."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key in PHONE_LOG_KEYS:
            value = getattr(record, key, None)
            if isinstance(value, str) and value:
                setattr(record, key, mask_phone(value))
        for key in SECRET_LOG_KEYS:
            if getattr(record, key, None):
                setattr(record, key, REDACTED)
        return True
