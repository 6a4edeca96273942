"""Process-wide record of the authenticated user."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from contas.domain.errors import NotAuthenticatedError

logger = logging.getLogger(__name__)

Listener = Callable[[Optional["SessionUser"]], None]


@dataclass(frozen=True)
class SessionUser:
    id: int
    username: str
    email: str = ""
    token: str = ""


class SessionStore:
    """Owned session record; services receive it explicitly instead of importing a singleton."""

    def __init__(self, user: SessionUser | None = None) -> None:
        self._user = user
        self._listeners: list[Listener] = []

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def token(self) -> Optional[str]:
        return self._user.token if self._user else None

    def require_user(self) -> SessionUser:
        if self._user is None:
            raise NotAuthenticatedError("Sessao expirada. Entre novamente.")
        return self._user

    def sign_in(self, user: SessionUser) -> None:
        self._user = user
        self._notify()

    def update_profile(self, username: str, email: str) -> SessionUser:
        """Replace username/email in one step; id and token are kept."""
        current = self.require_user()
        self._user = replace(current, username=username, email=email)
        logger.info("Sessao atualizada para o usuario %s", current.id)
        self._notify()
        return self._user

    def logout(self) -> None:
        if self._user is None:
            return
        logger.info("Logout do usuario %s", self._user.id)
        self._user = None
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._user)
            except Exception:
                logger.exception("Falha ao notificar ouvinte da sessao")
