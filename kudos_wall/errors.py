"""Domain error root and the error codes shared across features."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable identifiers the presentation layer maps to user-facing copy."""

    invalid_credentials = "invalid_credentials"
    user_not_found = "user_not_found"
    user_already_exists = "user_already_exists"
    validation_failed = "validation_failed"
    invalid_role = "invalid_role"
    invalid_role_transition = "invalid_role_transition"
    role_change_failed = "role_change_failed"
    admin_access_required = "admin_access_required"
    not_authorized = "not_authorized"
    user_management_failed = "user_management_failed"
    kudo_creation_failed = "kudo_creation_failed"
    kudos_retrieval_failed = "kudos_retrieval_failed"
    kudo_not_found = "kudo_not_found"
    invalid_period = "invalid_period"
    analytics_not_found = "analytics_not_found"
    transport = "transport"
    unknown = "unknown"


class KudosError(Exception):
    """Base class for every domain error.

    Subclasses set ``code``; instances carry ``params`` describing the
    failing input so callers never need to parse the message.
    """

    code: ErrorCode = ErrorCode.unknown

    def __init__(self, message: str, **params: Any) -> None:
        super().__init__(message)
        self.message = message
        self.params = params


class UserNotFoundError(KudosError):
    """No user matches the given email or id."""

    code = ErrorCode.user_not_found

    def __init__(self, identifier: str) -> None:
        super().__init__(f"User {identifier} not found", identifier=identifier)
