"""Role-based access control for views and actions.

Page access::

    login, signup                       public
    home, analytics                     any signed-in user
    create_kudos                        tech_lead, admin
    team_members, tech_leads, admin     admin
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Collection, Optional

import structlog

from kudos_wall.auth.errors import NotAuthorizedError
from kudos_wall.auth.models import Role, SessionState, UserProfile
from kudos_wall.auth.session import SessionManager
from kudos_wall.navigation import Navigator, Route

logger = structlog.get_logger()

ANY_ROLE: frozenset[Role] = frozenset(Role)

PAGE_ACCESS: dict[Route, Optional[frozenset[Role]]] = {
    Route.login: None,
    Route.signup: None,
    Route.home: ANY_ROLE,
    Route.analytics: ANY_ROLE,
    Route.create_kudos: frozenset({Role.tech_lead, Role.admin}),
    Route.team_members: frozenset({Role.admin}),
    Route.tech_leads: frozenset({Role.admin}),
    Route.admin: frozenset({Role.admin}),
}


def has_permission(user: Optional[UserProfile], roles: Collection[Role]) -> bool:
    """Return True if *user* holds one of *roles*."""
    return user is not None and user.role in roles


def require_role(user: Optional[UserProfile], roles: Collection[Role], message: Optional[str] = None) -> None:
    """Raise :class:`NotAuthorizedError` unless *user* holds one of *roles*.

    Usage in a use case::

        require_role(giver, {Role.tech_lead, Role.admin})
    """
    if not has_permission(user, roles):
        allowed = sorted(r.value for r in roles)
        raise NotAuthorizedError(
            message or f"Requires one of the roles: {', '.join(allowed)}",
            required_roles=allowed,
            role=user.role.value if user else None,
        )


class GuardOutcome(str, Enum):
    loading = "loading"
    redirect = "redirect"
    render = "render"


@dataclass(frozen=True)
class GuardDecision:
    outcome: GuardOutcome
    redirect_to: Optional[Route] = None

    @property
    def allowed(self) -> bool:
        return self.outcome is GuardOutcome.render


def evaluate_access(state: SessionState, user: Optional[UserProfile], route: Route) -> GuardDecision:
    """Decide what a view at *route* should do for the given session."""
    required = PAGE_ACCESS.get(route, ANY_ROLE)
    if required is None:
        return GuardDecision(GuardOutcome.render)
    if state is SessionState.loading:
        return GuardDecision(GuardOutcome.loading)
    if state is SessionState.unauthenticated or user is None:
        return GuardDecision(GuardOutcome.redirect, Route.login)
    if user.role not in required:
        return GuardDecision(GuardOutcome.redirect, Route.home)
    return GuardDecision(GuardOutcome.render)


class RoleGuard:
    """Keeps a protected view's access decision in sync with the session.

    The decision is recomputed on construction, on every session change
    and on :meth:`change_route`. A redirect is issued only when the
    decision changes, never while the session is still loading.
    """

    def __init__(self, session: SessionManager, navigator: Navigator, route: Route) -> None:
        self._session = session
        self._navigator = navigator
        self._route = route
        self._decision: Optional[GuardDecision] = None
        self._unsubscribe = session.subscribe(lambda _s: self._evaluate())
        self._evaluate()

    @property
    def route(self) -> Route:
        return self._route

    @property
    def decision(self) -> GuardDecision:
        if self._decision is None:
            return self._evaluate()
        return self._decision

    def change_route(self, route: Route) -> GuardDecision:
        self._route = route
        self._decision = None
        return self._evaluate()

    def close(self) -> None:
        self._unsubscribe()

    def _evaluate(self) -> GuardDecision:
        decision = evaluate_access(self._session.state, self._session.user, self._route)
        changed = decision != self._decision
        self._decision = decision
        if changed and decision.outcome is GuardOutcome.redirect and decision.redirect_to is not None:
            logger.info("guard_redirect", route=self._route.value, target=decision.redirect_to.value)
            self._navigator.navigate(decision.redirect_to)
        return decision
