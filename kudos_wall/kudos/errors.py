"""Kudo card errors."""

from __future__ import annotations

from kudos_wall.errors import ErrorCode, KudosError


class InvalidKudoCardPropertyError(KudosError):
    code = ErrorCode.validation_failed


class KudoCardNotFoundError(KudosError):
    code = ErrorCode.kudo_not_found

    def __init__(self, card_id: str) -> None:
        super().__init__(f"Kudo card with ID {card_id} not found", card_id=card_id)


class KudoCardCreationError(KudosError):
    code = ErrorCode.kudo_creation_failed

    def __init__(self, message: str = "Failed to create kudo card") -> None:
        super().__init__(message)


class FailedToRetrieveKudosError(KudosError):
    code = ErrorCode.kudos_retrieval_failed

    def __init__(self, message: str = "Failed to retrieve kudo cards") -> None:
        super().__init__(message)


class UserNotAuthorizedToCreateKudoError(KudosError):
    code = ErrorCode.not_authorized

    def __init__(
        self,
        message: str = "User is not authorized to create kudos. Only Tech Leads and Admins can create kudos.",
        **params,
    ) -> None:
        super().__init__(message, **params)
