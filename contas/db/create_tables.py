"""Create (or rebuild) the account API schema.

    python -m contas.db.create_tables [--drop]
"""
from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from contas.core.logs import configure_logging
from .session import Base, get_engine
from . import models  # noqa: F401  # users, clientes and sessions must be registered on Base


logger = logging.getLogger(__name__)


def create_all(drop: bool = False) -> list[str]:
    """Create every table on the configured database and return their names."""
    engine = get_engine()
    if drop:
        logger.warning("Removendo tabelas existentes em %s", engine.url.render_as_string(hide_password=True))
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    return sorted(Base.metadata.tables)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Cria as tabelas do banco de contas.")
    parser.add_argument("--drop", action="store_true", help="apaga as tabelas antes de recriar")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        tables = create_all(drop=args.drop)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Falha ao criar tabelas: {exc}") from exc
    logger.info("Tabelas prontas: %s", ", ".join(tables))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
