"""User-facing copy for failures and role changes.

Everything the CLI prints about an error goes through here; nothing else
inspects exception classes or message text.
"""

from __future__ import annotations

from typing import Callable, Literal, Optional

from kudos_wall.errors import ErrorCode
from kudos_wall.result import Failure

RoleOperation = Literal["promotion", "demotion"]
RoleErrorKind = Literal["not_found", "invalid_role", "unauthorized", "unknown"]

GENERIC_ERROR = "Something went wrong. Please try again."


def _own_message(failure: Failure) -> str:
    return failure.message


_COPY: dict[ErrorCode, Callable[[Failure], str]] = {
    ErrorCode.invalid_credentials: lambda f: "Invalid email or password",
    ErrorCode.user_not_found: _own_message,
    ErrorCode.user_already_exists: lambda f: f"User with email {f.params.get('email', '')} already exists",
    ErrorCode.validation_failed: _own_message,
    ErrorCode.invalid_role: _own_message,
    ErrorCode.invalid_role_transition: lambda f: (
        f"Cannot change role from {f.params.get('from_role')} to {f.params.get('to_role')}"
    ),
    ErrorCode.role_change_failed: _own_message,
    ErrorCode.admin_access_required: lambda f: "Administrator privileges are required to perform this action.",
    ErrorCode.not_authorized: _own_message,
    ErrorCode.user_management_failed: _own_message,
    ErrorCode.kudo_creation_failed: lambda f: f"Could not create the kudo card: {f.message}",
    ErrorCode.kudos_retrieval_failed: lambda f: "Could not load the kudos wall. Please try again.",
    ErrorCode.kudo_not_found: _own_message,
    ErrorCode.invalid_period: _own_message,
    ErrorCode.analytics_not_found: _own_message,
    ErrorCode.transport: lambda f: (
        "Could not reach the server. Check your connection and try again."
        if "status_code" not in f.params
        else f"The server responded with an error ({f.params['status_code']}): {f.message}"
    ),
    ErrorCode.unknown: lambda f: GENERIC_ERROR,
}


def error_message(failure: Failure) -> str:
    """Return the copy shown to the user for *failure*."""
    render = _COPY.get(failure.code)
    return render(failure) if render else GENERIC_ERROR


def format_success_message(operation: RoleOperation, user_name: Optional[str] = None) -> str:
    action = "promoted to Tech Lead" if operation == "promotion" else "demoted to Team Member"
    return f"{user_name} was successfully {action}." if user_name else f"User was successfully {action}."


def format_error_message(operation: RoleOperation, kind: RoleErrorKind, user_name: Optional[str] = None) -> str:
    verb = "promote" if operation == "promotion" else "demote"
    user = user_name or "User"
    if kind == "not_found":
        return f"{user} not found. Unable to {verb}."
    if kind == "invalid_role":
        return f"Invalid role transition. Unable to {verb} {user.lower()}."
    if kind == "unauthorized":
        return f"You don't have permission to {verb} {user.lower()}."
    return f"An unexpected error occurred while trying to {verb} {user.lower()}. Please try again."


_ROLE_ERROR_KINDS: dict[ErrorCode, RoleErrorKind] = {
    ErrorCode.user_not_found: "not_found",
    ErrorCode.invalid_role: "invalid_role",
    ErrorCode.invalid_role_transition: "invalid_role",
    ErrorCode.admin_access_required: "unauthorized",
    ErrorCode.not_authorized: "unauthorized",
}


def role_error_kind(code: ErrorCode) -> RoleErrorKind:
    return _ROLE_ERROR_KINDS.get(code, "unknown")
