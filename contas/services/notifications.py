"""Time-boxed success/error notices."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from contas.core.config import get_settings

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


class TransientNotice:
    """Holds at most one notice; it clears itself after ``ttl`` seconds."""

    def __init__(self, ttl: float | None = None) -> None:
        self.ttl = ttl if ttl is not None else get_settings().notice_ttl_seconds
        self.kind: Optional[str] = None
        self.message: str = ""
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def active(self) -> bool:
        return self.kind is not None

    def show_success(self, message: str) -> None:
        self._show(SUCCESS, message)

    def show_error(self, message: str) -> None:
        self._show(ERROR, message)

    def clear(self) -> None:
        self._cancel_timer()
        self.kind = None
        self.message = ""

    def _show(self, kind: str, message: str) -> None:
        self._cancel_timer()
        self.kind = kind
        self.message = message
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: nothing can expire it, callers clear it explicitly.
            logger.debug("Aviso sem loop ativo; nao sera limpo automaticamente")
            return
        self._timer = loop.call_later(self.ttl, self._expire)

    def _expire(self) -> None:
        self._timer = None
        self.kind = None
        self.message = ""

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
