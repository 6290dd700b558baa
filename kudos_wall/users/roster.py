"""Admin roster: the users of one role plus promote/demote actions.

The panel is a view model. It owns no rendering; the CLI (or a test) reads
``users``, ``is_loading`` and ``banner`` after each call. Banners expire on
their own after :data:`BANNER_TTL_SECONDS`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

import structlog

from kudos_wall.auth.models import Role
from kudos_wall.messages import (
    RoleOperation,
    error_message,
    format_error_message,
    format_success_message,
    role_error_kind,
)
from kudos_wall.result import Err, Result
from kudos_wall.users.models import ManagedUser
from kudos_wall.users.use_cases import DemoteLeadToMember, GetAllUsers, PromoteMemberToLead

logger = structlog.get_logger()

BANNER_TTL_SECONDS = 3.0

Clock = Callable[[], float]


class BannerKind(str, Enum):
    success = "success"
    error = "error"


@dataclass(frozen=True)
class Banner:
    kind: BannerKind
    text: str
    shown_at: float


class RoleManagementPanel:
    """Roster of *role* with promote/demote.

    Parameters
    ----------
    role:
        Role whose users are listed (``team_member`` on the promote tab,
        ``tech_lead`` on the demote tab).
    clock:
        Monotonic clock used to expire banners; injectable for tests.
    """

    def __init__(
        self,
        role: Role,
        get_users: GetAllUsers,
        promote: PromoteMemberToLead,
        demote: DemoteLeadToMember,
        clock: Clock = time.monotonic,
        banner_ttl: float = BANNER_TTL_SECONDS,
    ) -> None:
        self.role = role
        self._get_users = get_users
        self._promote = promote
        self._demote = demote
        self._clock = clock
        self._banner_ttl = banner_ttl
        self._banner: Optional[Banner] = None
        self.users: list[ManagedUser] = []
        self.is_loading = False
        self.load_error: Optional[str] = None

    @property
    def banner(self) -> Optional[Banner]:
        if self._banner and self._clock() - self._banner.shown_at >= self._banner_ttl:
            self._banner = None
        return self._banner

    def clear_banner(self) -> None:
        self._banner = None

    async def refresh(self) -> None:
        self.is_loading = True
        try:
            result = await self._get_users.execute(self.role)
        finally:
            self.is_loading = False
        if isinstance(result, Err):
            self.load_error = error_message(result.failure)
            self.users = []
            return
        self.load_error = None
        self.users = result.value

    async def promote(self, user_id: str, user_name: Optional[str] = None) -> bool:
        return await self._change_role("promotion", self._promote.execute, user_id, user_name)

    async def demote(self, user_id: str, user_name: Optional[str] = None) -> bool:
        return await self._change_role("demotion", self._demote.execute, user_id, user_name)

    async def _change_role(
        self,
        operation: RoleOperation,
        action: Callable[[str], Awaitable[Result[str]]],
        user_id: str,
        user_name: Optional[str],
    ) -> bool:
        self.clear_banner()
        self.is_loading = True
        try:
            result = await action(user_id)
        finally:
            self.is_loading = False

        if isinstance(result, Err):
            logger.warning("role_change_failed", operation=operation, user_id=user_id, code=result.code.value)
            text = format_error_message(operation, role_error_kind(result.code), user_name)
            self._show(BannerKind.error, text)
            return False

        self._show(BannerKind.success, format_success_message(operation, user_name))
        await self.refresh()
        return True

    def _show(self, kind: BannerKind, text: str) -> None:
        self._banner = Banner(kind, text, self._clock())
