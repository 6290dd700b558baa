"""Session manager -- the client's single source of truth for who is signed in.

The manager is constructed explicitly and handed to whatever needs it;
consumers observe it through :meth:`SessionManager.subscribe`.

State machine::

    loading --rehydrate--> authenticated | unauthenticated
    unauthenticated --login/register--> authenticated
    authenticated --logout / invalid token--> unauthenticated

Storage and in-memory state are always updated before any redirect.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

import structlog

from kudos_wall.auth.gateway import AuthGateway
from kudos_wall.auth.models import LoginRequest, RegisterRequest, Session, SessionState, UserProfile
from kudos_wall.auth.store import SessionStore
from kudos_wall.auth.use_cases import LoginUser, RegisterUser
from kudos_wall.navigation import Navigator, Route
from kudos_wall.result import Err, Ok, Result

logger = structlog.get_logger()

Listener = Callable[["SessionManager"], None]


class SessionManager:
    """Holds the current session and publishes every change to listeners."""

    def __init__(self, store: SessionStore, gateway: AuthGateway, navigator: Navigator) -> None:
        self._store = store
        self._navigator = navigator
        self._login = LoginUser(gateway)
        self._register = RegisterUser(gateway)
        self._session: Optional[Session] = None
        self._state = SessionState.loading
        self._loading = True
        self._listeners: list[Listener] = []

    # -- properties ----------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user(self) -> Optional[UserProfile]:
        return self._session.user if self._session else None

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.authenticated

    # -- observers -----------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("session_listener_failed")

    def _publish(self, session: Optional[Session]) -> None:
        self._session = session
        self._state = SessionState.authenticated if session else SessionState.unauthenticated
        self._loading = False
        self._notify()

    # -- lifecycle -----------------------------------------------------------

    def rehydrate(self) -> SessionState:
        """Restore the session from storage; clears half-written entries."""
        session = self._store.load()
        if session is None:
            self._store.clear()
        logger.debug("session_rehydrated", authenticated=session is not None)
        self._publish(session)
        return self._state

    def ensure_valid(self) -> bool:
        """Drop an authenticated session whose stored token expired or vanished."""
        if not self.is_authenticated:
            return False
        if self._store.get_token() is not None:
            return True
        logger.info("session_invalidated")
        self._store.clear()
        self._publish(None)
        return False

    async def login(self, email: str, password: str) -> Result[Session]:
        return await self._authenticate(self._login.execute(LoginRequest(email=email, password=password)))

    async def register(self, name: str, email: str, password: str) -> Result[Session]:
        return await self._authenticate(
            self._register.execute(RegisterRequest(name=name, email=email, password=password))
        )

    async def _authenticate(self, pending: Awaitable[Result[Session]]) -> Result[Session]:
        self._loading = True
        self._notify()
        try:
            result = await pending
        finally:
            self._loading = False

        if isinstance(result, Err):
            logger.info("authentication_failed", code=result.code.value)
            self._notify()
            return result

        session = result.value
        if not self._store.save(session):
            logger.warning("session_not_persisted", user_id=session.user.id)
        logger.info("authenticated", user_id=session.user.id, role=session.user.role.value)
        self._publish(session)
        self._navigator.navigate(Route.home)
        return Ok(session)

    def logout(self) -> None:
        """Clear storage and state, then redirect to the login view."""
        self._store.clear()
        was_authenticated = self._session is not None
        self._publish(None)
        if was_authenticated:
            logger.info("logged_out")
        self._navigator.navigate(Route.login)
