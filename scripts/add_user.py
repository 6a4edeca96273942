#!/usr/bin/env python3
"""
Cadastrar um usuario no banco da API de referencia e emitir um token de sessao.

Uso:
  python scripts/add_user.py --username maria --password 'Senha@123' [--email maria@exemplo.com]
"""
from __future__ import annotations

import argparse
import sys

from contas.core.security import hash_password
from contas.domain.passwords import check_password
from contas.repositories.sql_repository import SQLRepository
from contas.services.session_service import issue_session


def main() -> None:
    ap = argparse.ArgumentParser(description="Cadastrar usuario e emitir token de sessao")
    ap.add_argument("--username", required=True, help="Nome de usuario (unico)")
    ap.add_argument("--password", required=True, help="Senha inicial")
    ap.add_argument("--email", help="Email opcional")
    args = ap.parse_args()

    repo = SQLRepository()
    username = (args.username or "").strip()
    if not username:
        raise SystemExit("Nome de usuario invalido")
    if repo.get_user_by_username(username):
        raise SystemExit(f"Usuario '{username}' ja existe no banco")
    strength = check_password(args.password)
    if not strength.valid:
        raise SystemExit(strength.message)

    user = repo.create_user(username, hash_password(args.password), (args.email or "").strip() or None)
    token = issue_session(user.id)
    print("OK: usuario cadastrado")
    print(f"  ID: {user.id}")
    print(f"  Usuario: {user.username}")
    print(f"  Token: {token}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
