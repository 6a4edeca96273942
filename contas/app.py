"""Reference REST backend for the contas client."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contas.core.config import get_settings
from contas.core.logs import configure_logging
from contas.routers import clientes as clientes_router
from contas.routers import users as users_router


def create_app() -> FastAPI:
    """Factory compatível com uvicorn/gunicorn."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(title="Contas API")

    if settings.app_env != "prod":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            ],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    app.include_router(clientes_router.router)
    app.include_router(users_router.router)
    return app
