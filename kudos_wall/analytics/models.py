"""Recognition analytics: who and what was recognised over a period."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from kudos_wall.analytics.errors import AnalyticsError, InvalidPeriodError


class Period(str, Enum):
    weekly = "Weekly"
    monthly = "Monthly"
    yearly = "Yearly"

    @classmethod
    def parse(cls, value: "str | Period") -> "Period":
        """Accept ``Weekly`` or ``weekly``; anything else is an InvalidPeriodError."""
        if isinstance(value, Period):
            return value
        for period in cls:
            if period.value.lower() == str(value).strip().lower():
                return period
        raise InvalidPeriodError(str(value))


@dataclass(frozen=True)
class Recognition:
    """A person or team and how many kudos they received."""

    id: str
    name: str
    kudos_count: int

    def __post_init__(self) -> None:
        if not self.id:
            raise AnalyticsError("Recognition ID is required")
        if not self.name:
            raise AnalyticsError("Recognition name is required")
        if self.kudos_count < 0:
            raise AnalyticsError("Kudos count must be a non-negative number")


@dataclass(frozen=True)
class TrendingWord:
    word: str
    frequency: int

    def __post_init__(self) -> None:
        if not self.word:
            raise AnalyticsError("Word is required")
        if self.frequency < 0:
            raise AnalyticsError("Frequency must be a non-negative number")


@dataclass(frozen=True)
class TrendingCategory:
    category_name: str
    kudos_count: int

    def __post_init__(self) -> None:
        if not self.category_name:
            raise AnalyticsError("Category name is required")
        if self.kudos_count < 0:
            raise AnalyticsError("Kudos count must be a non-negative number")


@dataclass(frozen=True)
class AnalyticsReport:
    period: Period
    top_individuals: list[Recognition] = field(default_factory=list)
    top_teams: list[Recognition] = field(default_factory=list)
    trending_words: list[TrendingWord] = field(default_factory=list)
    trending_categories: list[TrendingCategory] = field(default_factory=list)
