"""httpx implementation of the backend collaborator.

Standardizes base URL, timeout and bearer header, and turns HTTP statuses and
transport failures into the domain error taxonomy.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx

from contas.core.config import Settings, get_settings
from contas.domain.errors import (
    AccountError,
    BackendError,
    ConflictError,
    CredentialError,
    FieldValidationError,
    NetworkError,
    NotFoundError,
)
from contas.domain.models import AccountProfile, CreatedCliente
from contas.repositories.backend import AccountBackend

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


def build_async_client(settings: Settings | None = None, *, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` pointed at the configured backend."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers={"Accept": "application/json"},
        transport=transport,
    )


def _detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return (response.text or "").strip()
    if isinstance(data, dict):
        detail = data.get("detail")
        if isinstance(detail, str):
            return detail
        if detail is not None:
            return str(detail)
    return str(data)


def _json(response: httpx.Response) -> dict[str, Any]:
    """Body of a success response; anything but a JSON object is a backend fault."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        logger.warning("Resposta invalida do servidor (status %s)", response.status_code)
        raise BackendError("Resposta invalida do servidor.", status_code=response.status_code)
    return data


class HttpBackend(AccountBackend):
    """REST backend reached over HTTP."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
        token_provider: TokenProvider | None = None,
    ):
        self._client = client or build_async_client(settings)
        self._token_provider = token_provider

    async def __aenter__(self) -> "HttpBackend":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -------------------------------------- helpers --------------------------------------
    def _headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def _request(self, method: str, url: str, *, json: Any = None, bad_request: type[AccountError] = FieldValidationError, default_message: str = "") -> httpx.Response:
        try:
            response = await self._client.request(method, url, json=json, headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.warning("Timeout em %s %s: %s", method, url, exc)
            raise NetworkError("O servidor demorou para responder. Tente novamente.") from exc
        except httpx.TransportError as exc:
            logger.warning("Falha de rede em %s %s: %s", method, url, exc)
            raise NetworkError("Falha de conexao com o servidor. Tente novamente.") from exc
        if response.is_success:
            return response
        message = _detail(response) or default_message or f"Erro {response.status_code}"
        logger.info("%s %s respondeu %s", method, url, response.status_code)
        status = response.status_code
        if status == 409:
            raise ConflictError(message)
        if status in (401, 403):
            raise CredentialError(message)
        if status == 404:
            raise NotFoundError(message)
        if status in (400, 422):
            raise bad_request(message)
        raise BackendError(message, status_code=status)

    # -------------------------------------- operations --------------------------------------
    async def create_client(self, payload: dict[str, Any]) -> CreatedCliente:
        response = await self._request("POST", "/clientes/", json=payload, default_message="Cliente já cadastrado")
        return CreatedCliente.from_payload(_json(response))

    async def update_user(self, user_id: int, username: str, email: str) -> AccountProfile:
        response = await self._request(
            "PUT",
            f"/users/{user_id}/",
            json={"username": username, "email": email},
            default_message="Erro ao salvar os dados do usuario.",
        )
        data = _json(response)
        return AccountProfile(id=data.get("id", user_id), username=data.get("username") or "", email=data.get("email") or "")

    async def change_password(self, old_password: str, new_password: str, user_id: Optional[int] = None) -> None:
        payload: dict[str, Any] = {"old_password": old_password, "new_password": new_password}
        if user_id is not None:
            payload["user_id"] = user_id
        await self._request(
            "POST",
            "/password-change/",
            json=payload,
            bad_request=CredentialError,
            default_message="Erro ao alterar a senha. Verifique se a senha atual esta correta.",
        )

    async def delete_user(self, user_id: int) -> None:
        await self._request("DELETE", f"/users/{user_id}/", default_message="Erro ao excluir a conta.")
