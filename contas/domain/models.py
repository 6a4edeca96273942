"""Plain data records exchanged between the flows and the backend."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional

from .documents import DocumentKind


class AccountEditMode(str, Enum):
    VIEWING = "viewing"
    EDITING_PROFILE = "editing_profile"
    CHANGING_PASSWORD = "changing_password"
    CONFIRMING_DELETION = "confirming_deletion"


@dataclass
class AccountProfile:
    id: Optional[int]
    username: str
    email: str = ""

    def copy(self) -> "AccountProfile":
        return replace(self)


@dataclass
class PasswordChangeRequest:
    old_password: str = ""
    new_password: str = ""
    confirm_new_password: str = ""

    def matches(self) -> bool:
        return self.new_password == self.confirm_new_password

    def clear(self) -> None:
        self.old_password = ""
        self.new_password = ""
        self.confirm_new_password = ""

    def __repr__(self) -> str:
        return "PasswordChangeRequest(<redacted>)"


@dataclass
class ClienteRecord:
    nome: str = ""
    cpf: str = ""
    cnpj: str = ""
    email: str = ""
    telefone: str = ""

    def document(self, kind: DocumentKind) -> str:
        return getattr(self, DocumentKind(kind).value) or ""

    def payload(self, kind: DocumentKind) -> dict[str, Any]:
        """Body for the backend; only the selected document is populated."""
        selected = DocumentKind(kind)
        data = asdict(self)
        for other in DocumentKind:
            if other is not selected:
                data[other.value] = ""
        data[selected.value] = (data[selected.value] or "").strip()
        return data


@dataclass
class CreatedCliente(ClienteRecord):
    id: Optional[int] = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "CreatedCliente":
        return cls(
            id=data.get("id"),
            nome=data.get("nome") or "",
            cpf=data.get("cpf") or "",
            cnpj=data.get("cnpj") or "",
            email=data.get("email") or "",
            telefone=data.get("telefone") or "",
        )
