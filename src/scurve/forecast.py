"""Prognosis of cumulative daily progress from the trailing average rate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from .types import DailyActualPoint, ForecastPoint, PlanPoint


@dataclass(frozen=True)
class RunRate:
    last_day: int
    last_actual: float
    actual_days: int
    daily_rate: float


def trailing_rate(daily: Sequence[DailyActualPoint]) -> RunRate | None:
    """Average daily rate over the days that recorded positive progress.

    Returns None when no day has positive actual progress.
    """
    actual = [p for p in sorted(daily, key=lambda p: p.day_index) if p.actual_cumulative > 0]
    if not actual:
        return None
    last = actual[-1]
    return RunRate(
        last_day=last.day_index,
        last_actual=float(last.actual_cumulative),
        actual_days=len(actual),
        daily_rate=float(last.actual_cumulative) / len(actual),
    )


def _optional(value: float) -> float | None:
    return None if pd.isna(value) else float(value)


def forecast_progress(
    daily: Sequence[DailyActualPoint],
    plan_schedule: Sequence[PlanPoint] | None,
    target: float,
) -> list[ForecastPoint]:
    """Plan, actual and prognosis lines over the plan schedule (or the daily days).

    Actual values run up to the last day with positive progress, carrying the
    latest cumulative value over days without a record. Prognosis starts at
    that day and grows by the trailing average rate, clamped to
    ``max(target, 0)``.
    """
    ceiling = max(float(target), 0.0)
    records = sorted(daily, key=lambda p: p.day_index)

    source = plan_schedule if plan_schedule else records
    plan = pd.Series({p.day_index: float(p.plan_cumulative) for p in source}, dtype=float).sort_index()
    if plan.empty:
        return []
    days = plan.index

    actual = pd.Series(np.nan, index=days)
    prognosis = pd.Series(np.nan, index=days)
    rate = trailing_rate(records)
    if rate is not None:
        recorded = pd.Series(
            {p.day_index: float(p.actual_cumulative) for p in records if p.actual_cumulative > 0}, dtype=float
        )
        carried = recorded.reindex(recorded.index.union(days)).ffill().reindex(days)
        actual = carried.where(days <= rate.last_day)

        offset = (days - rate.last_day).to_numpy(dtype=float)
        projected = np.minimum(ceiling, rate.last_actual + rate.daily_rate * offset)
        prognosis = pd.Series(np.where(offset >= 0, projected, np.nan), index=days)

    return [
        ForecastPoint(
            day=int(day),
            plan=float(plan.at[day]),
            actual=_optional(actual.at[day]),
            prognosis=_optional(prognosis.at[day]),
        )
        for day in days
    ]
