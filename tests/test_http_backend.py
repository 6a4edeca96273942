"""Tests for the httpx backend adapter (status and transport error mapping)."""
import json

import httpx
import pytest

from contas.domain.errors import (
    BackendError,
    ConflictError,
    CredentialError,
    FieldValidationError,
    NetworkError,
    NotFoundError,
)
from contas.domain.models import AccountEditMode, ClienteRecord
from contas.repositories.http_backend import HttpBackend
from contas.services.account_service import AccountSessionStateMachine
from contas.services.registration_service import RegistrationFlow


def _backend(handler, token="tok-1"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test")
    return HttpBackend(client=client, token_provider=lambda: token)


@pytest.mark.asyncio
async def test_create_client_posts_payload_with_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        body = json.loads(request.content)
        return httpx.Response(201, json={**body, "id": 42})

    async with _backend(handler) as backend:
        created = await backend.create_client({"nome": "Joana", "cpf": "52998224725", "cnpj": "", "email": "", "telefone": ""})

    assert seen == {"method": "POST", "path": "/clientes/", "auth": "Bearer tok-1"}
    assert created.id == 42
    assert created.cpf == "52998224725"


@pytest.mark.asyncio
async def test_missing_token_sends_no_authorization_header():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(204)

    async with _backend(handler, token=None) as backend:
        await backend.delete_user(3)
    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_update_user_returns_server_echo():
    def handler(request):
        assert request.method == "PUT"
        assert request.url.path == "/users/5/"
        return httpx.Response(200, json={"id": 5, "username": "ana", "email": "ana@exemplo.com"})

    async with _backend(handler) as backend:
        profile = await backend.update_user(5, "ana", "ANA@exemplo.com")
    assert profile.email == "ana@exemplo.com"
    assert profile.id == 5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, error_type",
    [(409, ConflictError), (401, CredentialError), (403, CredentialError), (404, NotFoundError), (422, FieldValidationError), (500, BackendError)],
)
async def test_status_mapping(status, error_type):
    def handler(request):
        return httpx.Response(status, json={"detail": "motivo"})

    async with _backend(handler) as backend:
        with pytest.raises(error_type) as info:
            await backend.update_user(1, "a", "b")
    assert info.value.message == "motivo"


@pytest.mark.asyncio
async def test_bad_request_on_password_change_is_credential_error():
    def handler(request):
        assert request.url.path == "/password-change/"
        assert json.loads(request.content) == {"old_password": "x", "new_password": "y", "user_id": 9}
        return httpx.Response(400, json={"detail": "Senha atual incorreta."})

    async with _backend(handler) as backend:
        with pytest.raises(CredentialError):
            await backend.change_password("x", "y", user_id=9)


@pytest.mark.asyncio
async def test_conflict_without_body_uses_default_message():
    def handler(request):
        return httpx.Response(409)

    async with _backend(handler) as backend:
        with pytest.raises(ConflictError) as info:
            await backend.create_client({})
    assert info.value.message == "Cliente já cadastrado"


@pytest.mark.asyncio
async def test_unexpected_status_keeps_code():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    async with _backend(handler) as backend:
        with pytest.raises(BackendError) as info:
            await backend.delete_user(1)
    assert info.value.status_code == 502


@pytest.mark.asyncio
@pytest.mark.parametrize("exc_type", [httpx.ReadTimeout, httpx.ConnectError])
async def test_transport_failures_become_retryable_network_errors(exc_type):
    def handler(request):
        raise exc_type("boom", request=request)

    async with _backend(handler) as backend:
        with pytest.raises(NetworkError) as info:
            await backend.delete_user(1)
    assert info.value.retryable is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [httpx.Response(200, text="<html>proxy</html>"), httpx.Response(200, text=""), httpx.Response(200, json=["maria"])],
)
async def test_update_user_rejects_body_that_is_not_an_object(response):
    def handler(request):
        return response

    async with _backend(handler) as backend:
        with pytest.raises(BackendError) as info:
            await backend.update_user(1, "a", "b")
    assert info.value.message == "Resposta invalida do servidor."
    assert info.value.status_code == 200


@pytest.mark.asyncio
async def test_create_client_with_empty_body_is_backend_error():
    def handler(request):
        return httpx.Response(201, text="")

    async with _backend(handler) as backend:
        with pytest.raises(BackendError) as info:
            await backend.create_client({"nome": "Joana", "cpf": "52998224725"})
    assert info.value.status_code == 201


@pytest.mark.asyncio
async def test_invalid_body_comes_back_as_result_values(session_store):
    def handler(request):
        if request.url.path == "/clientes/":
            return httpx.Response(201, text="")
        return httpx.Response(200, text="<html>proxy</html>")

    async with _backend(handler) as backend:
        machine = AccountSessionStateMachine(backend, session_store)
        machine.begin_edit()
        machine.update_profile_draft(username="maria.silva")
        saved = await machine.save()

        flow = RegistrationFlow(backend, notice_ttl=5)
        submitted = await flow.submit(ClienteRecord(nome="Joana", cpf="529.982.247-25"))

    assert isinstance(saved.error, BackendError)
    assert machine.mode is AccountEditMode.EDITING_PROFILE
    assert session_store.user.username == "maria"
    assert not machine.busy
    assert isinstance(submitted.error, BackendError)
    assert flow.notice.message == "Resposta invalida do servidor."
    assert flow.created == []
