"""Users as seen by the admin roster."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kudos_wall.auth.models import Role


@dataclass(frozen=True)
class ManagedUser:
    id: str
    name: str
    email: str
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ManagedUserPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    email: str
    role: Role
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: object) -> str:
        return str(v)

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, v: object) -> Role:
        return Role.parse(v)  # type: ignore[arg-type]

    def to_user(self) -> ManagedUser:
        return ManagedUser(
            id=self.id,
            name=self.name,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class UserListResponse(BaseModel):
    """``{users: [...]}`` returned by ``GET /users``."""

    users: list[ManagedUserPayload] = Field(default_factory=list)

    def to_users(self) -> list[ManagedUser]:
        return [payload.to_user() for payload in self.users]
