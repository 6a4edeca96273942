"""Bearer sessions for the reference backend (lookup and seeding)."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, Request

from contas.core.config import get_settings
from contas.core.security import new_session_token
from contas.db.models import User, UserSession
from contas.db.session import get_session


def issue_session(user_id: int) -> str:
    """Create a session token for an existing user (seeding scripts and tests)."""
    token = new_session_token()
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=ttl)

    with get_session() as session:
        session.add(UserSession(token=token, user_id=user_id, expires_at=expires_at))
        session.commit()
    return token


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization") or ""
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def current_user_id(request: Request) -> Optional[int]:
    """Return the id of the user owning the bearer token, if any."""
    token = _bearer_token(request)
    if not token:
        return None

    now = datetime.now(timezone.utc)
    with get_session() as session:
        db_session = session.get(UserSession, token)
        if not db_session:
            return None
        if db_session.expires_at and _as_aware(db_session.expires_at) < now:
            session.delete(db_session)
            session.commit()
            return None
        if session.get(User, db_session.user_id) is None:
            return None
        return db_session.user_id


def require_user_id(request: Request) -> int:
    """FastAPI dependency: 401 when the request carries no valid session."""
    user_id = current_user_id(request)
    if user_id is None:
        raise HTTPException(401, "Sessao invalida ou expirada")
    return user_id
