"""Tests for role-based access: page guard, permission checks and the menu."""

import pytest

from kudos_wall.auth.errors import NotAuthorizedError
from kudos_wall.auth.guard import (
    GuardOutcome,
    RoleGuard,
    evaluate_access,
    has_permission,
    require_role,
)
from kudos_wall.auth.models import Role, Session, SessionState, UserProfile
from kudos_wall.auth.session import SessionManager
from kudos_wall.auth.store import SessionStore
from kudos_wall.navigation import ConsoleNavigator, RecordingNavigator, Route, nav_items
from kudos_wall.storage import MemoryStore


def _user(role: Role) -> UserProfile:
    return UserProfile(id="u1", email="u1@example.com", name="U One", role=role)


class _NoAuth:
    async def login(self, request):
        raise AssertionError("not used")

    async def register(self, request):
        raise AssertionError("not used")


def _manager(user=None):
    backend = MemoryStore()
    if user is not None:
        SessionStore(backend).save(Session(token="tok", user=user))
    navigator = RecordingNavigator()
    return SessionManager(SessionStore(backend), _NoAuth(), navigator), navigator


# --- evaluate_access ---


def test_public_routes_render_even_while_loading():
    assert evaluate_access(SessionState.loading, None, Route.login).outcome is GuardOutcome.render
    assert evaluate_access(SessionState.unauthenticated, None, Route.signup).allowed


def test_loading_never_redirects():
    decision = evaluate_access(SessionState.loading, None, Route.admin)
    assert decision.outcome is GuardOutcome.loading
    assert decision.redirect_to is None


def test_unauthenticated_redirects_to_login():
    decision = evaluate_access(SessionState.unauthenticated, None, Route.home)
    assert decision.outcome is GuardOutcome.redirect
    assert decision.redirect_to is Route.login


@pytest.mark.parametrize(
    "role,route,allowed",
    [
        (Role.team_member, Route.home, True),
        (Role.team_member, Route.analytics, True),
        (Role.team_member, Route.create_kudos, False),
        (Role.tech_lead, Route.create_kudos, True),
        (Role.tech_lead, Route.team_members, False),
        (Role.admin, Route.create_kudos, True),
        (Role.admin, Route.team_members, True),
        (Role.admin, Route.tech_leads, True),
        (Role.admin, Route.admin, True),
    ],
)
def test_page_access_matrix(role, route, allowed):
    decision = evaluate_access(SessionState.authenticated, _user(role), route)
    assert decision.allowed is allowed
    if not allowed:
        assert decision.redirect_to is Route.home


# --- Permission checks ---


def test_has_permission():
    assert has_permission(_user(Role.admin), {Role.admin})
    assert not has_permission(_user(Role.team_member), {Role.admin, Role.tech_lead})
    assert not has_permission(None, {Role.admin})


def test_require_role_raises_with_params():
    with pytest.raises(NotAuthorizedError) as exc_info:
        require_role(_user(Role.team_member), {Role.tech_lead, Role.admin})
    assert exc_info.value.params == {"required_roles": ["admin", "tech_lead"], "role": "team_member"}


# --- RoleGuard ---


def test_guard_waits_while_loading_then_redirects_once():
    manager, navigator = _manager()
    guard = RoleGuard(manager, navigator, Route.create_kudos)
    assert guard.decision.outcome is GuardOutcome.loading
    assert navigator.history == []

    manager.rehydrate()
    assert guard.decision.redirect_to is Route.login
    assert navigator.history == [Route.login]

    manager.rehydrate()
    assert navigator.history == [Route.login]


def test_guard_renders_for_allowed_role():
    manager, navigator = _manager(_user(Role.tech_lead))
    manager.rehydrate()
    guard = RoleGuard(manager, navigator, Route.create_kudos)
    assert guard.decision.allowed
    assert navigator.history == []


def test_guard_redirects_home_for_wrong_role():
    manager, navigator = _manager(_user(Role.team_member))
    manager.rehydrate()
    guard = RoleGuard(manager, navigator, Route.team_members)
    assert guard.decision.redirect_to is Route.home
    assert navigator.history == [Route.home]


def test_guard_reacts_to_logout_and_route_change():
    manager, navigator = _manager(_user(Role.admin))
    manager.rehydrate()
    guard = RoleGuard(manager, navigator, Route.admin)
    assert guard.decision.allowed

    guard.change_route(Route.tech_leads)
    assert guard.decision.allowed

    manager.logout()
    assert guard.decision.redirect_to is Route.login
    # one redirect from the guard, one from logout itself
    assert navigator.history == [Route.login, Route.login]


def test_closed_guard_stops_listening():
    manager, navigator = _manager(_user(Role.admin))
    manager.rehydrate()
    guard = RoleGuard(manager, navigator, Route.admin)
    guard.close()
    manager.logout()
    assert navigator.history == [Route.login]
    assert guard.decision.allowed


# --- Navigation menu ---


def test_nav_items_per_role():
    def labels(role):
        return [item.label for item in nav_items(role)]

    assert labels(None) == []
    assert labels(Role.team_member) == ["Analytics"]
    assert labels(Role.tech_lead) == ["Analytics", "Create Kudos"]
    assert labels(Role.admin) == ["Analytics", "Create Kudos", "Team Members", "Tech Leads"]


def test_console_navigator_tracks_current_route():
    navigator = ConsoleNavigator()
    assert navigator.current is None

    navigator.navigate(Route.login)
    navigator.navigate(Route.home)

    assert navigator.current is Route.home
    assert navigator.history == [Route.login, Route.home]
