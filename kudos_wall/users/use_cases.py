"""User management use cases.

These only delegate: which role transitions are legal is decided by the
backend, and its errors pass through unchanged as failures.
"""

from __future__ import annotations

from typing import Optional

from kudos_wall.auth.models import Role
from kudos_wall.result import Err, Failure, Ok, Result
from kudos_wall.users.models import ManagedUser
from kudos_wall.users.repository import UserRepository, UserRoleRepository


class GetAllUsers:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    async def execute(self, role: Optional[Role] = None) -> Result[list[ManagedUser]]:
        try:
            return Ok(await self._repository.list_users(role))
        except Exception as e:
            return Err(Failure.from_exception(e))


class PromoteMemberToLead:
    def __init__(self, repository: UserRoleRepository) -> None:
        self._repository = repository

    async def execute(self, user_id: str) -> Result[str]:
        try:
            return Ok(await self._repository.promote_to_lead(user_id))
        except Exception as e:
            return Err(Failure.from_exception(e))


class DemoteLeadToMember:
    def __init__(self, repository: UserRoleRepository) -> None:
        self._repository = repository

    async def execute(self, user_id: str) -> Result[str]:
        try:
            return Ok(await self._repository.demote_to_member(user_id))
        except Exception as e:
            return Err(Failure.from_exception(e))
