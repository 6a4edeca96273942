from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from contas.core.security import hash_password, verify_password
from contas.domain.passwords import check_password
from contas.repositories.sql_repository import SQLRepository
from contas.services.session_service import require_user_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])
_sql_repo = SQLRepository()


class UserUpdatePayload(BaseModel):
    username: str
    email: str = ""


class PasswordChangePayload(BaseModel):
    old_password: str
    new_password: str


@router.get("/users/{user_id}/")
def get_user(user_id: int, _acting: int = Depends(require_user_id)):
    user = _sql_repo.get_user(user_id)
    if not user:
        raise HTTPException(404, "Usuario nao encontrado")
    return user.to_dict()


@router.put("/users/{user_id}/")
def update_user(user_id: int, payload: UserUpdatePayload, _acting: int = Depends(require_user_id)):
    username = payload.username.strip()
    email = payload.email.strip()
    if not username:
        raise HTTPException(400, "Nome de usuario obrigatorio")
    if not _sql_repo.get_user(user_id):
        raise HTTPException(404, "Usuario nao encontrado")
    if _sql_repo.identity_taken(user_id, username, email):
        raise HTTPException(409, "Nome de usuario ou e-mail ja em uso")
    user = _sql_repo.update_user_profile(user_id, username, email)
    if not user:
        raise HTTPException(404, "Usuario nao encontrado")
    return user.to_dict()


@router.delete("/users/{user_id}/", status_code=204)
def delete_user(user_id: int, _acting: int = Depends(require_user_id)):
    if not _sql_repo.delete_user(user_id):
        raise HTTPException(404, "Usuario nao encontrado")
    logger.info("Usuario %s excluido", user_id)
    return Response(status_code=204)


@router.post("/password-change/")
def change_password(payload: PasswordChangePayload, acting: int = Depends(require_user_id)):
    user = _sql_repo.get_user(acting)
    if not user:
        raise HTTPException(404, "Usuario nao encontrado")
    if not verify_password(payload.old_password, user.password_hash):
        raise HTTPException(400, "Senha atual incorreta.")
    strength = check_password(payload.new_password)
    if not strength.valid:
        raise HTTPException(400, strength.message)
    _sql_repo.update_user_password(acting, hash_password(payload.new_password))
    return {"detail": "Senha alterada com sucesso."}
