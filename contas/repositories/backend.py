"""Contract the account flows need from the REST backend."""
from abc import ABC, abstractmethod
from typing import Any, Optional

from contas.domain.models import AccountProfile, CreatedCliente


class AccountBackend(ABC):
    """Abstract backend collaborator.

    Implementations raise ``contas.domain.errors.AccountError`` subclasses on
    failure and never return partial results.
    """

    @abstractmethod
    async def create_client(self, payload: dict[str, Any]) -> CreatedCliente:
        """Persist a new cliente and return it with its server-assigned id."""
        ...

    @abstractmethod
    async def update_user(self, user_id: int, username: str, email: str) -> AccountProfile:
        """Update profile fields and return the values the server stored."""
        ...

    @abstractmethod
    async def change_password(self, old_password: str, new_password: str, user_id: Optional[int] = None) -> None:
        ...

    @abstractmethod
    async def delete_user(self, user_id: int) -> None:
        ...
