"""Fetch the analytics report for a period."""

from __future__ import annotations

from kudos_wall.analytics.models import AnalyticsReport, Period
from kudos_wall.analytics.source import AnalyticsSource
from kudos_wall.result import Err, Failure, Ok, Result


class GetAnalytics:
    def __init__(self, source: AnalyticsSource) -> None:
        self._source = source

    async def execute(self, period: str) -> Result[AnalyticsReport]:
        try:
            return Ok(await self._source.fetch(Period.parse(period)))
        except Exception as e:
            return Err(Failure.from_exception(e))
