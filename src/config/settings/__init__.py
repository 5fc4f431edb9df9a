"""Agregador de settings do serviço de webhooks.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    PROCESSING_MODES,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "PROCESSING_MODES",
    # Base
    "BaseSettings",
    "Environment",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_whatsapp_settings",
]
