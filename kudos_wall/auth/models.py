"""Auth domain models: roles, user profiles and sessions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Kudos wall roles: admin > tech_lead > team_member."""

    team_member = "team_member"
    tech_lead = "tech_lead"
    admin = "admin"

    @property
    def api_value(self) -> str:
        """Wire form used by the backend, e.g. ``TECH_LEAD``."""
        return self.value.upper()

    @property
    def label(self) -> str:
        return {
            Role.team_member: "Team Member",
            Role.tech_lead: "Tech Lead",
            Role.admin: "Admin",
        }[self]

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Accept either ``tech_lead`` or the backend's ``TECH_LEAD``."""
        if isinstance(value, Role):
            return value
        return cls(str(value).strip().lower())


class SessionState(str, Enum):
    """Lifecycle of the client-side session."""

    loading = "loading"
    authenticated = "authenticated"
    unauthenticated = "unauthenticated"


@dataclass(frozen=True)
class UserProfile:
    """Public profile of the signed-in user."""

    id: str
    email: str
    name: str
    role: Role

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            object.__setattr__(self, "role", Role.parse(self.role))

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role.value}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "UserProfile":
        return cls(id=str(d["id"]), email=d["email"], name=d["name"], role=Role.parse(d["role"]))


@dataclass(frozen=True)
class Session:
    """Bearer token plus the profile it belongs to."""

    token: str
    user: UserProfile


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str


@dataclass(frozen=True)
class RegisterRequest:
    name: str
    email: str
    password: str
