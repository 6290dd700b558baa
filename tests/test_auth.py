"""Tests for the auth gateway, use cases and session manager."""

import json
from datetime import timedelta

import httpx
import pytest

from kudos_wall.auth.gateway import HttpAuthGateway
from kudos_wall.auth.models import LoginRequest, RegisterRequest, Role, Session, SessionState, UserProfile
from kudos_wall.auth.session import SessionManager
from kudos_wall.auth.store import EXPIRATION_KEY, TOKEN_KEY, USER_KEY, SessionStore
from kudos_wall.auth.use_cases import LoginUser, RegisterUser
from kudos_wall.config import ApiPaths
from kudos_wall.errors import ErrorCode
from kudos_wall.http import HttpClient, HttpError
from kudos_wall.navigation import RecordingNavigator, Route
from kudos_wall.result import Err, Ok
from kudos_wall.storage import MemoryStore, StorageUnavailableError

LOGIN_OK = {
    "status": "success",
    "data": {
        "user": {"id": 7, "email": "lead@example.com", "name": "Lea", "role": "TECH_LEAD"},
        "token": "jwt-123",
    },
}

REGISTER_OK = {
    "status": "success",
    "data": {
        "id": "n1",
        "email": "new@example.com",
        "name": "Nia",
        "role": "TEAM_MEMBER",
        "createdAt": "2024-01-01T00:00:00Z",
        "token": "jwt-new",
    },
}


def _gateway(handler) -> HttpAuthGateway:
    http = HttpClient("http://api.test/api", transport=httpx.MockTransport(handler))
    return HttpAuthGateway(http, ApiPaths())


def _respond(status: int, body=None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body if body is not None else {"message": "nope"})

    return handler


def _manager(handler, backend=None):
    backend = backend if backend is not None else MemoryStore()
    navigator = RecordingNavigator()
    manager = SessionManager(SessionStore(backend), _gateway(handler), navigator)
    return manager, backend, navigator


# --- Gateway ---


@pytest.mark.asyncio
async def test_login_posts_credentials_and_maps_session():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=LOGIN_OK)

    session = await _gateway(handler).login(LoginRequest("lead@example.com", "password123"))
    assert seen["path"] == "/api/auth/login"
    assert seen["body"] == {"email": "lead@example.com", "password": "password123"}
    assert session.token == "jwt-123"
    assert session.user == UserProfile(id="7", email="lead@example.com", name="Lea", role=Role.tech_lead)


@pytest.mark.asyncio
async def test_register_maps_flat_payload():
    session = await _gateway(_respond(201, REGISTER_OK)).register(
        RegisterRequest("Nia", "new@example.com", "password123")
    )
    assert session.token == "jwt-new"
    assert session.user.role is Role.team_member


@pytest.mark.asyncio
async def test_other_statuses_propagate_unchanged():
    with pytest.raises(HttpError) as exc_info:
        await _gateway(_respond(500)).login(LoginRequest("a@b.co", "x"))
    assert exc_info.value.status_code == 500


# --- Use cases ---


@pytest.mark.asyncio
async def test_login_401_is_invalid_credentials():
    result = await LoginUser(_gateway(_respond(401))).execute(LoginRequest("a@b.co", "wrong"))
    assert isinstance(result, Err)
    assert result.code is ErrorCode.invalid_credentials
    assert result.failure.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_404_is_user_not_found():
    result = await LoginUser(_gateway(_respond(404))).execute(LoginRequest("ghost@b.co", "x"))
    assert isinstance(result, Err)
    assert result.code is ErrorCode.user_not_found
    assert result.failure.params == {"identifier": "ghost@b.co"}


@pytest.mark.asyncio
async def test_register_409_references_email():
    result = await RegisterUser(_gateway(_respond(409))).execute(
        RegisterRequest("Dup", "dup@example.com", "password123")
    )
    assert isinstance(result, Err)
    assert result.code is ErrorCode.user_already_exists
    assert "dup@example.com" in result.failure.message
    assert result.failure.params["email"] == "dup@example.com"


@pytest.mark.asyncio
async def test_unreachable_backend_is_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    result = await LoginUser(_gateway(handler)).execute(LoginRequest("a@b.co", "x"))
    assert isinstance(result, Err)
    assert result.code is ErrorCode.transport


# --- Session manager ---


def test_manager_starts_loading():
    manager, _, _ = _manager(_respond(200, LOGIN_OK))
    assert manager.state is SessionState.loading
    assert manager.loading is True


def test_rehydrate_without_stored_session_is_unauthenticated():
    manager, _, navigator = _manager(_respond(200, LOGIN_OK))
    assert manager.rehydrate() is SessionState.unauthenticated
    assert manager.user is None
    assert navigator.history == []


def test_rehydrate_restores_stored_session():
    backend = MemoryStore()
    user = UserProfile(id="1", email="admin@example.com", name="Admin", role=Role.admin)
    SessionStore(backend).save(Session(token="tok", user=user))

    manager, _, _ = _manager(_respond(200, LOGIN_OK), backend)
    assert manager.rehydrate() is SessionState.authenticated
    assert manager.user == user


def test_rehydrate_with_expired_token_purges_storage():
    backend = MemoryStore()
    now = [1_700_000_000.0]
    store = SessionStore(backend, ttl=timedelta(days=1), clock=lambda: now[0])
    user = UserProfile(id="1", email="admin@example.com", name="Admin", role=Role.admin)
    store.save(Session(token="tok", user=user))
    now[0] += 86_400

    manager = SessionManager(store, _gateway(_respond(200, LOGIN_OK)), RecordingNavigator())
    assert manager.rehydrate() is SessionState.unauthenticated
    assert manager.user is None
    for key in (TOKEN_KEY, EXPIRATION_KEY, USER_KEY):
        assert backend.get(key) is None


@pytest.mark.asyncio
async def test_login_success_stores_session_and_redirects_home():
    manager, backend, navigator = _manager(_respond(200, LOGIN_OK))
    manager.rehydrate()

    result = await manager.login("lead@example.com", "password123")

    assert isinstance(result, Ok)
    assert manager.state is SessionState.authenticated
    assert manager.user.role is Role.tech_lead
    assert backend.get(TOKEN_KEY) == "jwt-123"
    assert json.loads(backend.get(USER_KEY))["role"] == "tech_lead"
    assert navigator.history == [Route.home]


@pytest.mark.asyncio
async def test_failed_login_leaves_state_and_storage_untouched():
    manager, backend, navigator = _manager(_respond(401))
    manager.rehydrate()

    result = await manager.login("lead@example.com", "wrong")

    assert isinstance(result, Err)
    assert manager.state is SessionState.unauthenticated
    assert manager.loading is False
    assert backend.get(TOKEN_KEY) is None
    assert backend.get(USER_KEY) is None
    assert navigator.history == []


@pytest.mark.asyncio
async def test_session_still_usable_when_storage_fails():
    class _ReadOnly(MemoryStore):
        def set_many(self, items):
            raise StorageUnavailableError("read-only")

    manager, _, _ = _manager(_respond(200, LOGIN_OK), _ReadOnly())
    result = await manager.login("lead@example.com", "password123")
    assert isinstance(result, Ok)
    assert manager.is_authenticated


@pytest.mark.asyncio
async def test_listeners_see_loading_then_authenticated():
    manager, _, _ = _manager(_respond(200, LOGIN_OK))
    manager.rehydrate()
    seen = []
    manager.subscribe(lambda m: seen.append((m.loading, m.state)))

    await manager.login("lead@example.com", "password123")

    assert seen[0] == (True, SessionState.unauthenticated)
    assert seen[-1] == (False, SessionState.authenticated)


def test_unsubscribe_stops_notifications():
    manager, _, _ = _manager(_respond(200, LOGIN_OK))
    seen = []
    unsubscribe = manager.subscribe(lambda m: seen.append(m.state))
    manager.rehydrate()
    unsubscribe()
    manager.logout()
    assert seen == [SessionState.unauthenticated]


def test_failing_listener_does_not_break_others():
    manager, _, _ = _manager(_respond(200, LOGIN_OK))
    seen = []

    def broken(_m):
        raise RuntimeError("boom")

    manager.subscribe(broken)
    manager.subscribe(lambda m: seen.append(m.state))
    manager.rehydrate()
    assert seen == [SessionState.unauthenticated]


@pytest.mark.asyncio
async def test_logout_twice_is_safe_and_clears_storage():
    manager, backend, navigator = _manager(_respond(200, LOGIN_OK))
    await manager.login("lead@example.com", "password123")

    manager.logout()
    manager.logout()

    assert manager.state is SessionState.unauthenticated
    assert backend.get(TOKEN_KEY) is None
    assert backend.get(USER_KEY) is None
    assert navigator.history == [Route.home, Route.login, Route.login]


def test_ensure_valid_drops_session_whose_token_vanished():
    backend = MemoryStore()
    user = UserProfile(id="1", email="admin@example.com", name="Admin", role=Role.admin)
    SessionStore(backend).save(Session(token="tok", user=user))
    manager, _, _ = _manager(_respond(200, LOGIN_OK), backend)
    manager.rehydrate()

    backend.remove_many([TOKEN_KEY])

    assert manager.ensure_valid() is False
    assert manager.state is SessionState.unauthenticated
    assert backend.get(USER_KEY) is None
