from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from contas.domain.documents import DocumentKind, only_digits, validate_document
from contas.repositories.sql_repository import SQLRepository
from contas.services.session_service import require_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clientes", tags=["clientes"])
_sql_repo = SQLRepository()


class ClientePayload(BaseModel):
    nome: str = ""
    cpf: str = ""
    cnpj: str = ""
    email: str = ""
    telefone: str = ""


@router.get("/")
def list_clientes(_user_id: int = Depends(require_user_id)):
    return [cliente.to_dict() for cliente in _sql_repo.list_clientes()]


@router.post("/", status_code=201)
def create_cliente(payload: ClientePayload, _user_id: int = Depends(require_user_id)):
    cpf = only_digits(payload.cpf)
    cnpj = only_digits(payload.cnpj)
    if bool(cpf) == bool(cnpj):
        raise HTTPException(400, "Informe apenas um documento: CPF ou CNPJ")
    kind = DocumentKind.INDIVIDUAL if cpf else DocumentKind.LEGAL_ENTITY
    verdict = validate_document(kind, cpf or cnpj)
    if not verdict.valid:
        raise HTTPException(400, verdict.message)
    nome = payload.nome.strip()
    if not nome:
        raise HTTPException(400, "Nome obrigatorio")
    email = payload.email.strip()
    if _sql_repo.cliente_exists(cpf=cpf, cnpj=cnpj, email=email):
        raise HTTPException(409, "Cliente já cadastrado")
    cliente = _sql_repo.create_cliente(nome, cpf=cpf, cnpj=cnpj, email=email, telefone=payload.telefone.strip())
    logger.info("Cliente %s criado", cliente.id)
    return cliente.to_dict()
