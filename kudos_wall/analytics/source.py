"""Where analytics reports come from."""

from __future__ import annotations

from typing import Protocol
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from kudos_wall.analytics.errors import AnalyticsDataNotFoundError
from kudos_wall.analytics.models import AnalyticsReport, Period, Recognition, TrendingCategory, TrendingWord
from kudos_wall.config import ApiPaths
from kudos_wall.http import HttpClient, HttpError


class AnalyticsSource(Protocol):
    async def fetch(self, period: Period) -> AnalyticsReport: ...


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------


class _Camel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RecognitionStat(_Camel):
    id: str
    name: str
    kudos_count: int = Field(alias="kudosCount")


class TrendingWordStat(_Camel):
    word: str
    frequency: int


class TrendingCategoryStat(_Camel):
    category_name: str = Field(alias="categoryName")
    kudos_count: int = Field(alias="kudosCount")


class AnalyticsPayload(_Camel):
    """``{topIndividuals, topTeams, trendingWords, trendingCategories}``."""

    top_individuals: list[RecognitionStat] = Field(default_factory=list, alias="topIndividuals")
    top_teams: list[RecognitionStat] = Field(default_factory=list, alias="topTeams")
    trending_words: list[TrendingWordStat] = Field(default_factory=list, alias="trendingWords")
    trending_categories: list[TrendingCategoryStat] = Field(default_factory=list, alias="trendingCategories")

    def to_report(self, period: Period) -> AnalyticsReport:
        return AnalyticsReport(
            period=period,
            top_individuals=[Recognition(r.id, r.name, r.kudos_count) for r in self.top_individuals],
            top_teams=[Recognition(r.id, r.name, r.kudos_count) for r in self.top_teams],
            trending_words=[TrendingWord(w.word, w.frequency) for w in self.trending_words],
            trending_categories=[
                TrendingCategory(c.category_name, c.kudos_count) for c in self.trending_categories
            ],
        )


class HttpAnalyticsSource:
    def __init__(self, http: HttpClient, paths: ApiPaths) -> None:
        self._http = http
        self._paths = paths

    async def fetch(self, period: Period) -> AnalyticsReport:
        path = f"{self._paths.analytics}?{urlencode({'period': period.value})}"
        try:
            body = await self._http.get(path)
        except HttpError as e:
            if e.status_code == 404:
                raise AnalyticsDataNotFoundError(period.value) from e
            raise
        if not body:
            raise AnalyticsDataNotFoundError(period.value)
        return AnalyticsPayload.model_validate(body).to_report(period)
