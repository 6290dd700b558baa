"""Routes, navigation targets and the role-aware navigation menu."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

import structlog

from kudos_wall.auth.models import Role

logger = structlog.get_logger()


class Route(str, Enum):
    """Views of the kudos wall."""

    home = "/"
    login = "/login"
    signup = "/signup"
    analytics = "/analytics"
    create_kudos = "/create-kudos"
    team_members = "/team-members"
    tech_leads = "/tech-leads"
    admin = "/admin"


class Navigator(Protocol):
    @property
    def current(self) -> Optional[Route]: ...

    def navigate(self, route: Route) -> None: ...


class RecordingNavigator:
    """Keeps every navigation in ``history``; optionally forwards to a callback."""

    def __init__(self, on_navigate: Optional[Callable[[Route], None]] = None) -> None:
        self.history: list[Route] = []
        self._on_navigate = on_navigate

    @property
    def current(self) -> Optional[Route]:
        return self.history[-1] if self.history else None

    def navigate(self, route: Route) -> None:
        self.history.append(route)
        if self._on_navigate is not None:
            self._on_navigate(route)


class ConsoleNavigator(RecordingNavigator):
    """Navigator for the command line: there are no pages, so each move is logged."""

    def navigate(self, route: Route) -> None:
        logger.debug("navigate", route=route.value, previous=self.current.value if self.current else None)
        super().navigate(route)


@dataclass(frozen=True)
class NavItem:
    label: str
    route: Route


_NAV_ITEMS: list[tuple[NavItem, frozenset[Role]]] = [
    (NavItem("Analytics", Route.analytics), frozenset(Role)),
    (NavItem("Create Kudos", Route.create_kudos), frozenset({Role.tech_lead, Role.admin})),
    (NavItem("Team Members", Route.team_members), frozenset({Role.admin})),
    (NavItem("Tech Leads", Route.tech_leads), frozenset({Role.admin})),
]


def nav_items(role: Optional[Role]) -> list[NavItem]:
    """Return the menu entries visible to *role* (none when signed out)."""
    if role is None:
        return []
    return [item for item, roles in _NAV_ITEMS if role in roles]
