"""Engine and session helpers for the reference account API.

The engine is built once per process from ``DATABASE_URL``; ``reset_engine``
drops the cached engine so a new URL (a temporary SQLite file in tests, for
instance) takes effect on the next call.
"""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from contas.core.config import get_settings

Base = declarative_base()


def _connect_args(url: str) -> dict:
    # sqlite connections are shared between the ASGI threadpool and the caller
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


@lru_cache
def get_engine() -> Engine:
    url = (get_settings().database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL precisa estar configurada para usar o banco de contas.")
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=_connect_args(url))


@lru_cache
def _get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


def reset_engine() -> None:
    """Dispose the cached engine and forget it, along with the session factory."""
    if get_engine.cache_info().currsize:
        get_engine().dispose()
    get_engine.cache_clear()
    _get_sessionmaker.cache_clear()


@contextmanager
def get_session() -> Iterator[Session]:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
