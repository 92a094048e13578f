from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MalformedInputError(ValueError):
    """Raised when an export has too few usable lines to hold a header and data."""


class RowKind(str, Enum):
    CONTROL = "control"
    ACTIVITY = "activity"


class SummarySource(str, Enum):
    EXPLICIT = "explicit"
    SYNTHESIZED = "synthesized"


@dataclass(frozen=True)
class WeekColumn:
    column_index: int
    label: str  # e.g. "Juni-1"


@dataclass(frozen=True)
class RowContext:
    owner: str = ""
    project: str = ""
    category: str = ""
    sub_category: str = ""


@dataclass(frozen=True)
class ActivityRecord:
    owner: str
    project: str
    name: str
    weekly_progress: dict[str, float]  # week label -> strictly positive %
    category: str | None = None
    sub_category: str | None = None
    start_week: int | None = None  # ordinal among week columns
    end_week: int | None = None


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    name: str
    owner: str
    activities: list[ActivityRecord] = field(default_factory=list)


@dataclass(frozen=True)
class WeeklyPoint:
    week_label: str
    week_index: int
    baseline: float
    actual: float

    @property
    def variance(self) -> float:
        return self.actual - self.baseline


@dataclass(frozen=True)
class MonthlyPoint:
    month: str  # 3-letter abbreviation
    plan: float
    actual: float


@dataclass(frozen=True)
class DailyActualPoint:
    day_index: int
    plan_cumulative: float
    actual_cumulative: float


@dataclass(frozen=True)
class PlanPoint:
    day_index: int
    plan_cumulative: float


@dataclass(frozen=True)
class ForecastPoint:
    day: int
    plan: float
    actual: float | None
    prognosis: float | None


@dataclass(frozen=True)
class ParseResult:
    projects: list[ProjectRecord]
    weekly_summary: list[WeeklyPoint]
    summary_source: SummarySource
    week_columns: list[WeekColumn]
    warnings: list[str]
