"""Pydantic models for the auth endpoints' request and response bodies."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kudos_wall.auth.models import Role, Session, UserProfile


class UserPayload(BaseModel):
    """Mirrors kudos_wall.auth.models.UserProfile on the wire."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str
    name: str
    role: Role

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: object) -> str:
        return str(v)

    @field_validator("role", mode="before")
    @classmethod
    def _parse_role(cls, v: object) -> Role:
        return Role.parse(v)  # type: ignore[arg-type]

    def to_profile(self) -> UserProfile:
        return UserProfile(id=self.id, email=self.email, name=self.name, role=self.role)


class LoginData(BaseModel):
    user: UserPayload
    token: str


class LoginResponse(BaseModel):
    """``{status, data: {user, token}}`` returned by ``POST /auth/login``."""

    status: str = "success"
    data: LoginData

    def to_session(self) -> Session:
        return Session(token=self.data.token, user=self.data.user.to_profile())


class RegisterData(UserPayload):
    token: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")


class RegisterResponse(BaseModel):
    """``{status, data: {id, email, name, role, createdAt, token}}`` from ``POST /auth/register``."""

    status: str = "success"
    data: RegisterData

    def to_session(self) -> Session:
        return Session(token=self.data.token, user=self.data.to_profile())
