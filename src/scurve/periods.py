"""Weekly to monthly downsampling of cumulative S-curve series."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .config import ParserConfig, default_parser_config
from .types import MonthlyPoint, WeeklyPoint


def month_token(week_label: str) -> str:
    return week_label.rsplit("-", 1)[0]


def weekly_to_monthly(weekly: Sequence[WeeklyPoint], config: ParserConfig | None = None) -> list[MonthlyPoint]:
    """One point per calendar month present, holding the month's last weekly value.

    The series is cumulative, so the last week of a month is its
    cumulative-to-date figure. Months without weeks are omitted and labels
    outside the configured month cycle are ignored.
    """
    if not weekly:
        return []
    config = config or default_parser_config()

    frame = pd.DataFrame(
        {
            "Month": [month_token(p.week_label) for p in weekly],
            "WeekIndex": [p.week_index for p in weekly],
            "Plan": [float(p.baseline) for p in weekly],
            "Actual": [float(p.actual) for p in weekly],
        }
    )
    frame = frame[frame["Month"].isin(config.months)].sort_values("WeekIndex", kind="stable")
    last = frame.groupby("Month", sort=False)[["Plan", "Actual"]].last()

    return [
        MonthlyPoint(month=month[:3], plan=float(last.at[month, "Plan"]), actual=float(last.at[month, "Actual"]))
        for month in config.months
        if month in last.index
    ]
