"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

import pytest

# Garante que o pacote contas seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from contas.core import config as core_config  # noqa: E402
from contas.domain.errors import AccountError  # noqa: E402
from contas.domain.models import AccountProfile, CreatedCliente  # noqa: E402
from contas.repositories.backend import AccountBackend  # noqa: E402
from contas.services.session_store import SessionStore, SessionUser  # noqa: E402



class FakeBackend(AccountBackend):
    """In-memory backend that records calls and can fail or block on demand."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.errors: dict[str, AccountError] = {}
        self.gate: Optional[asyncio.Event] = None
        self._next_id = 1

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def _enter(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.gate is not None:
            await self.gate.wait()
        error = self.errors.get(name)
        if error is not None:
            raise error

    async def create_client(self, payload):
        await self._enter("create_client", payload)
        created = CreatedCliente.from_payload({**payload, "id": self._next_id})
        self._next_id += 1
        return created

    async def update_user(self, user_id, username, email):
        await self._enter("update_user", user_id, username, email)
        # the server normalizes e-mails; callers must keep the echoed value
        return AccountProfile(id=user_id, username=username, email=email.lower())

    async def change_password(self, old_password, new_password, user_id=None):
        await self._enter("change_password", old_password, new_password, user_id)

    async def delete_user(self, user_id):
        await self._enter("delete_user", user_id)


@pytest.fixture(autouse=True)
def fresh_settings():
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def session_user():
    return SessionUser(id=7, username="maria", email="maria@exemplo.com", token="tok-7")


@pytest.fixture
def session_store(session_user):
    return SessionStore(session_user)
