"""User listing and role changes over the REST API."""

from __future__ import annotations

from typing import Optional, Protocol

import httpx
import structlog

from kudos_wall.auth.models import Role
from kudos_wall.config import ApiPaths
from kudos_wall.errors import UserNotFoundError
from kudos_wall.http import HttpClient, HttpError
from kudos_wall.users.errors import (
    AdminAccessRequiredError,
    FailToDemoteLeadError,
    FailToPromoteMemberError,
    InvalidRoleError,
    InvalidRoleTransitionError,
    UserManagementServiceError,
)
from kudos_wall.users.models import ManagedUser, UserListResponse

logger = structlog.get_logger()


class UserRepository(Protocol):
    async def list_users(self, role: Optional[Role] = None) -> list[ManagedUser]: ...


class UserRoleRepository(Protocol):
    async def promote_to_lead(self, user_id: str) -> str: ...

    async def demote_to_member(self, user_id: str) -> str: ...


class HttpUserRepository:
    def __init__(self, http: HttpClient, paths: ApiPaths) -> None:
        self._http = http
        self._paths = paths

    async def list_users(self, role: Optional[Role] = None) -> list[ManagedUser]:
        """List users, optionally filtered by role.

        Every failure surfaces as one of the user management errors.
        """
        path = self._paths.users
        if role is not None:
            path += f"?role={role.api_value}"
        try:
            body = await self._http.get(path)
        except HttpError as e:
            message = e.data.get("message")
            if e.status_code == 400:
                raise InvalidRoleError(message or "Invalid role specified.") from e
            if e.status_code == 401:
                raise UserManagementServiceError("Authentication failed or JWT is missing.") from e
            if e.status_code == 403:
                raise AdminAccessRequiredError(message or "Admin access required.") from e
            raise UserManagementServiceError(message or "An unexpected server error occurred.") from e
        except httpx.RequestError as e:
            raise UserManagementServiceError(
                str(e) or "An unexpected error occurred while fetching users."
            ) from e
        return UserListResponse.model_validate(body or {}).to_users()


class HttpUserRoleRepository:
    """PATCH ``/users/<id>/role``; the backend decides which transitions are legal."""

    def __init__(self, http: HttpClient, paths: ApiPaths) -> None:
        self._http = http
        self._paths = paths

    async def promote_to_lead(self, user_id: str) -> str:
        return await self._change_role(user_id, Role.team_member, Role.tech_lead, FailToPromoteMemberError)

    async def demote_to_member(self, user_id: str) -> str:
        return await self._change_role(user_id, Role.tech_lead, Role.team_member, FailToDemoteLeadError)

    async def _change_role(self, user_id: str, from_role: Role, to_role: Role, failure: type) -> str:
        try:
            body = await self._http.patch(
                f"{self._paths.users}/{user_id}/role",
                body={"newRole": to_role.api_value},
            )
        except HttpError as e:
            if e.status_code == 404:
                raise UserNotFoundError(user_id) from e
            if e.status_code == 400:
                raise InvalidRoleTransitionError(user_id, from_role.api_value, to_role.api_value) from e
            raise failure(user_id) from e
        except httpx.RequestError as e:
            raise failure(user_id) from e
        logger.info("user_role_changed", user_id=user_id, role=to_role.value)
        if isinstance(body, dict) and body.get("id"):
            return str(body["id"])
        return user_id
