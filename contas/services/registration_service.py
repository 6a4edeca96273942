"""Cliente registration use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Optional

from contas.domain.documents import DocumentKind, validate_document
from contas.domain.errors import (
    AccountError,
    ConflictError,
    DocumentInvalidError,
    OperationInProgressError,
)
from contas.domain.models import ClienteRecord, CreatedCliente
from contas.repositories.backend import AccountBackend
from contas.services.notifications import TransientNotice
from contas.services.single_flight import IN_PROGRESS_MESSAGE, SingleFlight

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Cadastrado com sucesso!"
CONFLICT_MESSAGE = "Cliente já cadastrado"

_RECORD_FIELDS = {f.name for f in fields(ClienteRecord)}


@dataclass(frozen=True)
class RegistrationResult:
    ok: bool
    created: Optional[CreatedCliente] = None
    error: Optional[AccountError] = None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""


class RegistrationFlow:
    """Validates, submits and accumulates new clientes."""

    def __init__(self, backend: AccountBackend, notice_ttl: float | None = None) -> None:
        self.backend = backend
        self.record = ClienteRecord()
        self.document_kind = DocumentKind.INDIVIDUAL
        self.created: list[CreatedCliente] = []
        self.field_errors: dict[str, str] = {}
        self.notice = TransientNotice(notice_ttl)
        self._flight = SingleFlight()

    @property
    def busy(self) -> bool:
        return self._flight.busy

    def select_document_kind(self, kind: DocumentKind) -> None:
        self.document_kind = DocumentKind(kind)
        self.field_errors.pop(self.document_kind.value, None)

    def set_field(self, name: str, value: str) -> None:
        if name not in _RECORD_FIELDS:
            raise AttributeError(f"Campo desconhecido: {name}")
        setattr(self.record, name, value)
        self.field_errors.pop(name, None)

    async def submit(
        self,
        record: ClienteRecord | None = None,
        document_kind: DocumentKind | None = None,
    ) -> RegistrationResult:
        if self._flight.busy:
            return RegistrationResult(False, error=OperationInProgressError(IN_PROGRESS_MESSAGE))
        if record is not None:
            self.record = record
        if document_kind is not None:
            self.document_kind = DocumentKind(document_kind)

        kind = self.document_kind
        self.field_errors.clear()
        verdict = validate_document(kind, self.record.document(kind))
        if not verdict.valid:
            self.field_errors[kind.value] = verdict.message
            return RegistrationResult(False, error=DocumentInvalidError(verdict.message, field=kind.value))

        with self._flight.claim():
            try:
                created = await self.backend.create_client(self.record.payload(kind))
            except ConflictError as exc:
                logger.info("Cadastro recusado: cliente ja existe")
                self.notice.show_error(CONFLICT_MESSAGE)
                return RegistrationResult(False, error=exc)
            except AccountError as exc:
                logger.warning("Falha ao cadastrar cliente: %s", exc.message)
                self.notice.show_error(exc.message)
                return RegistrationResult(False, error=exc)

        logger.info("Cliente %s cadastrado", created.id)
        self.created.append(created)
        self.record = ClienteRecord()
        self.notice.show_success(SUCCESS_MESSAGE)
        return RegistrationResult(True, created=created)
