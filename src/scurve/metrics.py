from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import math
from typing import Sequence

from .forecast import trailing_rate
from .types import DailyActualPoint


@dataclass(frozen=True)
class WorkMetrics:
    plan_percentage: float
    actual_percentage: float
    day_of_work: int
    remaining_days: int
    actual_total: float
    average_per_day: float
    required_per_day: float
    average_productivity: float
    required_manpower: int
    additional_manpower: int


def _ratio(num: float, den: float) -> float:
    return num / den if den > 0 else 0.0


def compute_work_metrics(
    daily: Sequence[DailyActualPoint],
    target: float,
    start_date: date,
    end_date: date,
    today: date,
    manpower_existing: int = 0,
    productivity_target: float = 0.0,
) -> WorkMetrics:
    """Headline numbers for a daily-tracked work package as of ``today``.

    Percentages are relative to ``target``; the required rate spreads the
    remaining target over the remaining calendar days.
    """
    rate = trailing_rate(daily)
    actual_total = rate.last_actual if rate else 0.0
    plan_today = 0.0
    if rate is not None:
        plan_today = next((float(p.plan_cumulative) for p in daily if p.day_index == rate.last_day), 0.0)

    day_of_work = max(1, (today - start_date).days + 1)
    remaining_days = max(0, (end_date - today).days)

    average_per_day = actual_total / day_of_work
    required_per_day = _ratio(target - actual_total, remaining_days)
    required_manpower = max(0, math.ceil(_ratio(required_per_day, productivity_target)))

    return WorkMetrics(
        plan_percentage=_ratio(plan_today, target) * 100,
        actual_percentage=_ratio(actual_total, target) * 100,
        day_of_work=day_of_work,
        remaining_days=remaining_days,
        actual_total=actual_total,
        average_per_day=average_per_day,
        required_per_day=required_per_day,
        average_productivity=_ratio(average_per_day, manpower_existing),
        required_manpower=required_manpower,
        additional_manpower=max(0, required_manpower - manpower_existing),
    )
