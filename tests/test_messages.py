"""Tests for user-facing copy."""

import pytest

from kudos_wall.auth.errors import InvalidCredentialsError, UserAlreadyExistsError
from kudos_wall.errors import ErrorCode
from kudos_wall.messages import error_message, format_error_message, format_success_message, role_error_kind
from kudos_wall.result import Failure


def test_every_error_code_has_copy():
    for code in ErrorCode:
        text = error_message(Failure(code=code, message="detail"))
        assert text


def test_auth_copy():
    assert error_message(Failure.from_exception(InvalidCredentialsError())) == "Invalid email or password"
    assert (
        error_message(Failure.from_exception(UserAlreadyExistsError("dup@example.com")))
        == "User with email dup@example.com already exists"
    )


def test_transport_copy_with_and_without_status():
    assert "Could not reach the server" in error_message(Failure(ErrorCode.transport, "x"))
    assert "(503)" in error_message(Failure(ErrorCode.transport, "down", params={"status_code": 503}))


def test_success_copy():
    assert format_success_message("promotion", "Ana") == "Ana was successfully promoted to Tech Lead."
    assert format_success_message("demotion") == "User was successfully demoted to Team Member."


@pytest.mark.parametrize(
    "operation,kind,name,expected",
    [
        ("promotion", "not_found", "Ana", "Ana not found. Unable to promote."),
        ("demotion", "invalid_role", None, "Invalid role transition. Unable to demote user."),
        ("promotion", "unauthorized", "Ana", "You don't have permission to promote ana."),
        (
            "demotion",
            "unknown",
            None,
            "An unexpected error occurred while trying to demote user. Please try again.",
        ),
    ],
)
def test_role_error_copy(operation, kind, name, expected):
    assert format_error_message(operation, kind, name) == expected


def test_role_error_kind_from_code():
    assert role_error_kind(ErrorCode.user_not_found) == "not_found"
    assert role_error_kind(ErrorCode.invalid_role_transition) == "invalid_role"
    assert role_error_kind(ErrorCode.admin_access_required) == "unauthorized"
    assert role_error_kind(ErrorCode.transport) == "unknown"
