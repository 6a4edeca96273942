"""High-level data access helpers backed by SQLAlchemy (reference backend)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import or_, select

from contas.db.models import Cliente, User
from contas.db.session import get_session


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.username == username)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, username: str, password_hash: str, email: str | None = None) -> User:
        now = datetime.now(timezone.utc)
        entity = User(
            username=username,
            email=email or None,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def identity_taken(self, user_id: int, username: str, email: str | None) -> bool:
        """True when another user already owns ``username`` or ``email``."""
        clauses = [User.username == username]
        if email:
            clauses.append(User.email == email)
        with get_session() as session:
            stmt = select(User.id).where(or_(*clauses), User.id != user_id)
            return session.execute(stmt).first() is not None

    def update_user_profile(self, user_id: int, username: str, email: str | None) -> Optional[User]:
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                return None
            user.username = username
            user.email = email or None
            user.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(user)
            return user

    def update_user_password(self, user_id: int, password_hash: str) -> None:
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                return
            user.password_hash = password_hash
            user.updated_at = datetime.now(timezone.utc)
            session.commit()

    def delete_user(self, user_id: int) -> bool:
        """Remove the user and its sessions; False when it did not exist."""
        with get_session() as session:
            user = session.get(User, user_id)
            if not user:
                return False
            session.delete(user)
            session.commit()
            return True

    # -------------------------- clientes --------------------------
    def list_clientes(self) -> list[Cliente]:
        with get_session() as session:
            return session.execute(select(Cliente).order_by(Cliente.id)).scalars().all()

    def cliente_exists(self, *, cpf: str | None = None, cnpj: str | None = None, email: str | None = None) -> bool:
        clauses = []
        if cpf:
            clauses.append(Cliente.cpf == cpf)
        if cnpj:
            clauses.append(Cliente.cnpj == cnpj)
        if email:
            clauses.append(Cliente.email == email)
        if not clauses:
            return False
        with get_session() as session:
            return session.execute(select(Cliente.id).where(or_(*clauses))).first() is not None

    def create_cliente(
        self,
        nome: str,
        *,
        cpf: str | None = None,
        cnpj: str | None = None,
        email: str | None = None,
        telefone: str = "",
    ) -> Cliente:
        entity = Cliente(
            nome=nome,
            cpf=cpf or None,
            cnpj=cnpj or None,
            email=email or None,
            telefone=telefone or "",
            created_at=datetime.now(timezone.utc),
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity
