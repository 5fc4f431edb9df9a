"""Erros e helpers de parsing para a Graph API da Meta."""

from __future__ import annotations

from typing import Any

PERMANENT_ERROR_CODES = frozenset({400, 401, 403, 404, 413})
PERMANENT_ERROR_TYPES = frozenset({"OAuthException", "InvalidRequest"})


class GraphApiError(Exception):
    """Erro retornado no corpo `{"error": {...}}` da Graph API."""

    def __init__(
        self,
        error_type: str,
        error_code: int,
        error_message: str,
        *,
        error_subcode: int | None = None,
        fbtrace_id: str | None = None,
        http_status: int | None = None,
    ) -> None:
        super().__init__(f"Meta API error: {error_type} ({error_code}): {error_message}")
        self.error_type = error_type
        self.error_code = error_code
        self.error_message = error_message
        self.error_subcode = error_subcode
        self.fbtrace_id = fbtrace_id
        self.http_status = http_status

    @property
    def is_permanent(self) -> bool:
        return is_permanent_error(self.error_code, self.error_type)


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros permanentes: 400, 401, 403, 404, 413
    Erros transitórios: 429 (rate limit), 500+ (server errors)
    """
    if error_code in PERMANENT_ERROR_CODES:
        return True
    return error_type in PERMANENT_ERROR_TYPES


def parse_meta_error(
    response_data: Any,
    http_status: int | None = None,
) -> GraphApiError | None:
    """Extrai o erro do response da Meta.

    Returns:
        GraphApiError se houver erro, None se sucesso
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    return GraphApiError(
        error_type=str(error_obj.get("type", "unknown")),
        error_code=int(error_obj.get("code", 0) or 0),
        error_message=str(error_obj.get("message", "Erro desconhecido")),
        error_subcode=error_obj.get("error_subcode"),
        fbtrace_id=error_obj.get("fbtrace_id"),
        http_status=http_status,
    )
