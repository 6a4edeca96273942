"""Tests for the injected session store."""
import pytest

from contas.domain.errors import NotAuthenticatedError
from contas.services.session_store import SessionStore, SessionUser


def test_update_profile_keeps_id_and_token(session_store):
    updated = session_store.update_profile("nova", "nova@exemplo.com")
    assert updated == SessionUser(id=7, username="nova", email="nova@exemplo.com", token="tok-7")
    assert session_store.user is updated


def test_logout_clears_everything(session_store):
    session_store.logout()
    assert session_store.user is None
    assert session_store.token is None
    assert not session_store.is_authenticated
    with pytest.raises(NotAuthenticatedError):
        session_store.require_user()


def test_update_without_user_fails():
    with pytest.raises(NotAuthenticatedError):
        SessionStore().update_profile("a", "b")


def test_subscribers_are_notified_until_unsubscribed(session_store, session_user):
    seen = []
    unsubscribe = session_store.subscribe(seen.append)
    session_store.update_profile("x", "x@exemplo.com")
    unsubscribe()
    session_store.logout()
    assert len(seen) == 1
    assert seen[0].username == "x"

    session_store.sign_in(session_user)
    assert session_store.token == "tok-7"
    assert len(seen) == 1


def test_failing_listener_does_not_break_update(session_store, caplog):
    seen = []

    def broken(user):
        raise RuntimeError("ouvinte quebrado")

    session_store.subscribe(broken)
    session_store.subscribe(seen.append)
    with caplog.at_level("ERROR", logger="contas.services.session_store"):
        updated = session_store.update_profile("nova", "nova@exemplo.com")

    assert session_store.user is updated
    assert [u.username for u in seen] == ["nova"]
    assert "Falha ao notificar ouvinte da sessao" in caplog.text


@pytest.mark.asyncio
async def test_failing_listener_does_not_escape_save(backend, session_store):
    from contas.services.account_service import AccountSessionStateMachine

    def broken(user):
        raise RuntimeError("ouvinte quebrado")

    session_store.subscribe(broken)
    machine = AccountSessionStateMachine(backend, session_store)
    machine.begin_edit()
    machine.update_profile_draft(username="maria.silva")
    result = await machine.save()
    assert result.ok
    assert session_store.user.username == "maria.silva"
