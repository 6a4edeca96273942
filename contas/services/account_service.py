"""
Account self-service use cases: edit profile, change password, delete account.

The screen is always in exactly one AccountEditMode. Entering a mode discards
whatever the previous one left unsaved, and the session store is written only
after the backend confirms a change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from contas.core.config import get_settings
from contas.domain.errors import (
    AccountError,
    FieldValidationError,
    InvalidTransitionError,
    NotFoundError,
    OperationInProgressError,
    PasswordMismatchError,
    WeakPasswordError,
)
from contas.domain.models import AccountEditMode, AccountProfile, PasswordChangeRequest
from contas.domain.passwords import check_password
from contas.repositories.backend import AccountBackend
from contas.services.session_store import SessionStore
from contas.services.single_flight import IN_PROGRESS_MESSAGE, SingleFlight

logger = logging.getLogger(__name__)

Navigate = Callable[[str], None]


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    error: Optional[AccountError] = None

    @classmethod
    def success(cls) -> "ActionResult":
        return cls(True)

    @classmethod
    def failure(cls, error: AccountError) -> "ActionResult":
        return cls(False, error)

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""


class AccountSessionStateMachine:
    """Drives the profile screen and reconciles results into the session store."""

    def __init__(
        self,
        backend: AccountBackend,
        session_store: SessionStore,
        navigate: Navigate | None = None,
        landing_path: str | None = None,
    ) -> None:
        self.backend = backend
        self.session = session_store
        self.landing_path = landing_path or get_settings().landing_path
        self._navigate = navigate
        self._flight = SingleFlight()
        self.mode = AccountEditMode.VIEWING
        self.profile = self._profile_from_store()
        self.password = PasswordChangeRequest()
        self.error: Optional[AccountError] = None

    # -------------------------------------- state --------------------------------------
    @property
    def busy(self) -> bool:
        return self._flight.busy

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""

    @property
    def deletion_prompt(self) -> str:
        return f"Tem certeza que deseja excluir sua conta {self.profile.username}?"

    def _profile_from_store(self) -> AccountProfile:
        user = self.session.user
        if user is None:
            return AccountProfile(id=None, username="", email="")
        return AccountProfile(id=user.id, username=user.username, email=user.email or "")

    def _discard_drafts(self) -> None:
        self.profile = self._profile_from_store()
        self.password.clear()

    def _surface(self, error: AccountError) -> ActionResult:
        self.error = error
        return ActionResult.failure(error)

    def _go_to_landing(self) -> None:
        if self._navigate is not None:
            self._navigate(self.landing_path)

    def _invalidate_session(self) -> None:
        logger.warning("Conta nao encontrada no servidor; encerrando sessao")
        self.session.logout()
        self.mode = AccountEditMode.VIEWING
        self._discard_drafts()
        self._go_to_landing()

    # -------------------------------------- modes --------------------------------------
    def _enter(self, mode: AccountEditMode) -> ActionResult:
        if self._flight.busy:
            return ActionResult.failure(OperationInProgressError(IN_PROGRESS_MESSAGE))
        if self.mode is not mode:
            logger.debug("Modo %s -> %s", self.mode.value, mode.value)
        self._discard_drafts()
        self.error = None
        self.mode = mode
        return ActionResult.success()

    def begin_edit(self) -> ActionResult:
        return self._enter(AccountEditMode.EDITING_PROFILE)

    def begin_password_change(self) -> ActionResult:
        return self._enter(AccountEditMode.CHANGING_PASSWORD)

    def request_deletion(self) -> ActionResult:
        return self._enter(AccountEditMode.CONFIRMING_DELETION)

    def cancel(self) -> ActionResult:
        return self._enter(AccountEditMode.VIEWING)

    def cancel_deletion(self) -> ActionResult:
        if self.mode is not AccountEditMode.CONFIRMING_DELETION:
            return ActionResult.success()
        return self._enter(AccountEditMode.VIEWING)

    # -------------------------------------- input --------------------------------------
    def update_profile_draft(self, *, username: str | None = None, email: str | None = None) -> ActionResult:
        if self._flight.busy:
            return ActionResult.failure(OperationInProgressError(IN_PROGRESS_MESSAGE))
        if self.mode is not AccountEditMode.EDITING_PROFILE:
            return ActionResult.failure(InvalidTransitionError("Clique em Editar para alterar o perfil."))
        if username is not None:
            self.profile.username = username
        if email is not None:
            self.profile.email = email
        return ActionResult.success()

    def fill_password(
        self,
        old_password: str | None = None,
        new_password: str | None = None,
        confirm_new_password: str | None = None,
    ) -> ActionResult:
        if self._flight.busy:
            return ActionResult.failure(OperationInProgressError(IN_PROGRESS_MESSAGE))
        if self.mode is not AccountEditMode.CHANGING_PASSWORD:
            return ActionResult.failure(InvalidTransitionError("Clique em Alterar senha para trocar a senha."))
        if old_password is not None:
            self.password.old_password = old_password
        if new_password is not None:
            self.password.new_password = new_password
        if confirm_new_password is not None:
            self.password.confirm_new_password = confirm_new_password
        return ActionResult.success()

    # -------------------------------------- mutations --------------------------------------
    async def save(self) -> ActionResult:
        if self._flight.busy:
            return ActionResult.failure(OperationInProgressError(IN_PROGRESS_MESSAGE))
        if self.mode is AccountEditMode.EDITING_PROFILE:
            handler = self._save_profile
        elif self.mode is AccountEditMode.CHANGING_PASSWORD:
            handler = self._save_password
        else:
            return ActionResult.failure(InvalidTransitionError("Nao ha alteracoes para salvar."))

        with self._flight.claim():
            try:
                await handler()
            except NotFoundError as exc:
                self._invalidate_session()
                return self._surface(exc)
            except AccountError as exc:
                logger.warning("Falha ao salvar (%s): %s", self.mode.value, exc.message)
                return self._surface(exc)
        return ActionResult.success()

    async def _save_profile(self) -> None:
        user = self.session.require_user()
        username = self.profile.username.strip()
        email = self.profile.email.strip()
        if not username:
            raise FieldValidationError("Informe um nome de usuario.", field="username")
        logger.info("Salvando perfil do usuario %s", user.id)
        updated = await self.backend.update_user(user.id, username, email)
        self.session.update_profile(updated.username, updated.email)
        self.profile = self._profile_from_store()
        self.error = None
        self.mode = AccountEditMode.VIEWING

    async def _save_password(self) -> None:
        request = self.password
        try:
            if not request.matches():
                raise PasswordMismatchError()
            strength = check_password(request.new_password)
            if not strength.valid:
                raise WeakPasswordError(strength.message)
            user = self.session.require_user()
            logger.info("Alterando senha do usuario %s", user.id)
            await self.backend.change_password(request.old_password, request.new_password, user_id=user.id)
        finally:
            request.clear()
        self.error = None
        self.mode = AccountEditMode.VIEWING

    async def confirm_deletion(self) -> ActionResult:
        if self._flight.busy:
            return ActionResult.failure(OperationInProgressError(IN_PROGRESS_MESSAGE))
        if self.mode is not AccountEditMode.CONFIRMING_DELETION:
            return ActionResult.failure(InvalidTransitionError("Confirme a exclusao antes de continuar."))

        with self._flight.claim():
            try:
                user = self.session.require_user()
                logger.info("Excluindo usuario %s", user.id)
                await self.backend.delete_user(user.id)
            except NotFoundError as exc:
                self._invalidate_session()
                return self._surface(exc)
            except AccountError as exc:
                logger.warning("Falha ao excluir conta: %s", exc.message)
                self.mode = AccountEditMode.VIEWING
                return self._surface(exc)
        self.session.logout()
        self.mode = AccountEditMode.VIEWING
        self.error = None
        self._discard_drafts()
        self._go_to_landing()
        return ActionResult.success()
