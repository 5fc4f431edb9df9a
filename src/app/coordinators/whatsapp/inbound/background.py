"""Controle de tasks assíncronas para dispatch do webhook WhatsApp."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 100


class BackgroundTasks:
    """Conjunto de tasks de dispatch agendadas no modo `async`."""

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._max_concurrency = max_concurrency
        self._semaphore: asyncio.Semaphore | None = None
        self._active: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._active)

    def schedule(self, coroutine: Coroutine[Any, Any, Any], *, correlation_id: str) -> int:
        """Agenda task com limite de concorrência e retorna o total ativo."""
        task = asyncio.create_task(self._run_with_limit(coroutine))
        self._active.add(task)
        task.add_done_callback(self._on_done)
        logger.info(
            "webhook_processing_scheduled",
            extra={
                "channel": "whatsapp",
                "correlation_id": correlation_id,
                "mode": "async",
                "active_tasks": len(self._active),
            },
        )
        return len(self._active)

    async def _run_with_limit(self, coroutine: Coroutine[Any, Any, Any]) -> None:
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self._max_concurrency)
        async with self._semaphore:
            await coroutine

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._active.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "webhook_processing_task_failed",
                    extra={
                        "channel": "whatsapp",
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes; cancela o que passar do timeout."""
        if not self._active:
            return

        pending_now = list(self._active)
        logger.info(
            "webhook_processing_shutdown_wait",
            extra={
                "channel": "whatsapp",
                "pending_tasks": len(pending_now),
                "timeout_seconds": timeout_seconds,
            },
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "webhook_processing_shutdown_cancelled",
            extra={"channel": "whatsapp", "cancelled_tasks": len(pending)},
        )
