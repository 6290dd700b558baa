"""Analytics errors."""

from __future__ import annotations

from kudos_wall.errors import ErrorCode, KudosError


class AnalyticsError(KudosError):
    code = ErrorCode.validation_failed


class InvalidPeriodError(AnalyticsError):
    code = ErrorCode.invalid_period

    def __init__(self, period: str) -> None:
        super().__init__(
            f"Invalid analytics period: {period}. Expected Weekly, Monthly, or Yearly.",
            period=period,
        )


class AnalyticsDataNotFoundError(AnalyticsError):
    code = ErrorCode.analytics_not_found

    def __init__(self, period: str) -> None:
        super().__init__(f"Analytics data not found for period: {period}", period=period)
