"""Token and profile persistence on top of a key/value store.

Reads are self-healing: an expired token or an unreadable profile is
reported as absent and purged. Storage failures are logged and never
propagated, so session bootstrap cannot crash on a broken store.
"""

from __future__ import annotations

import json
import time
from datetime import timedelta
from typing import Callable, Optional

import structlog

from kudos_wall.auth.models import Session, UserProfile
from kudos_wall.storage import KeyValueStore, StorageUnavailableError

logger = structlog.get_logger()

TOKEN_KEY = "auth_token"
EXPIRATION_KEY = "auth_token_expiration"
USER_KEY = "auth_user"


class SessionStore:
    """Persist the bearer token (with optional expiry) and the user profile.

    Parameters
    ----------
    store:
        Durable or session-scoped key/value backend.
    ttl:
        Token lifetime. ``None`` stores tokens without an expiry.
    clock:
        Returns the current time in seconds since the epoch.
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl: Optional[timedelta] = timedelta(days=30),
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._ttl = ttl
        self._clock = clock

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _get(self, key: str) -> Optional[str]:
        try:
            return self._store.get(key)
        except StorageUnavailableError as e:
            logger.warning("storage_read_failed", key=key, error=str(e))
            return None

    def _set(self, items: dict[str, str]) -> bool:
        try:
            self._store.set_many(items)
            return True
        except StorageUnavailableError as e:
            logger.warning("storage_write_failed", keys=sorted(items), error=str(e))
            return False

    def _remove(self, *keys: str) -> None:
        try:
            self._store.remove_many(keys)
        except StorageUnavailableError as e:
            logger.warning("storage_remove_failed", keys=list(keys), error=str(e))

    def _token_entries(self, token: str) -> dict[str, str]:
        entries = {TOKEN_KEY: token}
        if self._ttl is not None:
            expires_at = self._now_ms() + int(self._ttl.total_seconds() * 1000)
            entries[EXPIRATION_KEY] = str(expires_at)
        return entries

    # ------------------------------------------------------------------
    # Token
    # ------------------------------------------------------------------

    def save_token(self, token: str) -> None:
        entries = self._token_entries(token)
        if self._ttl is None:
            self._remove(EXPIRATION_KEY)
        self._set(entries)

    def get_token(self) -> Optional[str]:
        token = self._get(TOKEN_KEY)
        if not token:
            return None

        expiration = self._get(EXPIRATION_KEY)
        if expiration is None:
            return token
        try:
            expires_at = int(expiration)
        except ValueError:
            expires_at = 0
        if self._now_ms() < expires_at:
            return token

        logger.info("token_expired_purged")
        self.remove_token()
        return None

    def remove_token(self) -> None:
        self._remove(TOKEN_KEY, EXPIRATION_KEY)

    def has_token(self) -> bool:
        return self.get_token() is not None

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def save_profile(self, profile: UserProfile) -> None:
        self._set({USER_KEY: json.dumps(profile.to_dict())})

    def get_profile(self) -> Optional[UserProfile]:
        raw = self._get(USER_KEY)
        if not raw:
            return None
        try:
            return UserProfile.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("stored_profile_unreadable", error=str(e))
            self.remove_profile()
            return None

    def remove_profile(self) -> None:
        self._remove(USER_KEY)

    # ------------------------------------------------------------------
    # Whole session
    # ------------------------------------------------------------------

    def save(self, session: Session) -> bool:
        """Write token, expiry and profile in a single store call."""
        entries = self._token_entries(session.token)
        entries[USER_KEY] = json.dumps(session.user.to_dict())
        if self._ttl is None:
            self._remove(EXPIRATION_KEY)
        return self._set(entries)

    def load(self) -> Optional[Session]:
        token = self.get_token()
        profile = self.get_profile()
        if token and profile:
            return Session(token=token, user=profile)
        return None

    def clear(self) -> None:
        self._remove(TOKEN_KEY, EXPIRATION_KEY, USER_KEY)
