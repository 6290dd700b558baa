"""Success/failure values returned at the use-case boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

import httpx
import structlog

from kudos_wall.errors import ErrorCode, KudosError
from kudos_wall.http import HttpError

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class Failure:
    """A structured failure: a code, its parameters and the original error."""

    code: ErrorCode
    message: str
    params: dict[str, Any] = field(default_factory=dict)
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        if isinstance(exc, KudosError):
            return cls(code=exc.code, message=exc.message, params=dict(exc.params), cause=exc)
        if isinstance(exc, HttpError):
            return cls(
                code=ErrorCode.transport,
                message=str(exc),
                params={"status_code": exc.status_code},
                cause=exc,
            )
        if isinstance(exc, httpx.RequestError):
            logger.warning("backend_unreachable", error=str(exc))
            return cls(code=ErrorCode.transport, message="Could not reach the server", cause=exc)
        logger.error("unexpected_failure", error_type=type(exc).__name__, exc_info=exc)
        return cls(code=ErrorCode.unknown, message=str(exc) or type(exc).__name__, cause=exc)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    failure: Failure

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> ErrorCode:
        return self.failure.code


Result = Union[Ok[T], Err]
