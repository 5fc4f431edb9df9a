"""Rotas HTTP da API (FastAPI).

Estrutura:
- routes/whatsapp/: webhook (GET/POST /webhook/whatsapp/) e Flows (POST /webhook/whatsapp/flow)
- routes/health/: liveness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
