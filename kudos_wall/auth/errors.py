"""Errors raised by the auth gateway and guards."""

from __future__ import annotations

from kudos_wall.errors import ErrorCode, KudosError, UserNotFoundError


class InvalidCredentialsError(KudosError):
    code = ErrorCode.invalid_credentials

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class UserAlreadyExistsError(KudosError):
    code = ErrorCode.user_already_exists

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists", email=email)


class NotAuthorizedError(KudosError):
    """The signed-in user's role does not allow the action."""

    code = ErrorCode.not_authorized

    def __init__(self, message: str = "You are not allowed to perform this action.", **params) -> None:
        super().__init__(message, **params)


__all__ = [
    "InvalidCredentialsError",
    "NotAuthorizedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
