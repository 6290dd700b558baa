"""User management errors."""

from __future__ import annotations

from kudos_wall.errors import ErrorCode, KudosError, UserNotFoundError

__all__ = [
    "AdminAccessRequiredError",
    "FailToDemoteLeadError",
    "FailToPromoteMemberError",
    "InvalidRoleError",
    "InvalidRoleTransitionError",
    "RoleChangeFailedError",
    "UserManagementServiceError",
    "UserNotFoundError",
]


class InvalidRoleError(KudosError):
    code = ErrorCode.invalid_role

    def __init__(self, message: str = "Invalid role provided.") -> None:
        super().__init__(message)


class AdminAccessRequiredError(KudosError):
    code = ErrorCode.admin_access_required

    def __init__(self, message: str = "Administrator privileges are required to perform this action.") -> None:
        super().__init__(message)


class UserManagementServiceError(KudosError):
    code = ErrorCode.user_management_failed

    def __init__(self, message: str = "An unexpected error occurred in the user management service.") -> None:
        super().__init__(message)


class InvalidRoleTransitionError(KudosError):
    """The backend refused a role change; carries the attempted edge."""

    code = ErrorCode.invalid_role_transition

    def __init__(self, user_id: str, from_role: str, to_role: str) -> None:
        super().__init__(
            f"Cannot change role for user {user_id} from {from_role} to {to_role}",
            user_id=user_id,
            from_role=from_role,
            to_role=to_role,
        )


class RoleChangeFailedError(KudosError):
    code = ErrorCode.role_change_failed

    def __init__(self, user_id: str, message: str = "Role change operation failed") -> None:
        super().__init__(f"{message} for user {user_id}", user_id=user_id)


class FailToPromoteMemberError(RoleChangeFailedError):
    def __init__(self, user_id: str, message: str = "Failed to promote team member to tech lead") -> None:
        super().__init__(user_id, message)


class FailToDemoteLeadError(RoleChangeFailedError):
    def __init__(self, user_id: str, message: str = "Failed to demote tech lead to team member") -> None:
        super().__init__(user_id, message)
