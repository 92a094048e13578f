from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.dataframe import dataframe_to_rows

from .types import ForecastPoint, MonthlyPoint, ParseResult, ProjectRecord, WeeklyPoint


def projects_frame(projects: Sequence[ProjectRecord]) -> pd.DataFrame:
    rows = [
        {
            "ProjectId": p.id,
            "Project": p.name,
            "Owner": p.owner,
            "Activities": len(p.activities),
            "TotalProgress": sum(sum(a.weekly_progress.values()) for a in p.activities),
        }
        for p in projects
    ]
    return pd.DataFrame(rows, columns=["ProjectId", "Project", "Owner", "Activities", "TotalProgress"])


def activities_frame(projects: Sequence[ProjectRecord], week_labels: Sequence[str] = ()) -> pd.DataFrame:
    """One row per activity with a column per week label."""
    meta_cols = ["ProjectId", "Owner", "Project", "Category", "SubCategory", "Activity", "StartWeek", "EndWeek"]
    rows: list[dict[str, Any]] = []
    for p in projects:
        for a in p.activities:
            row: dict[str, Any] = {
                "ProjectId": p.id,
                "Owner": a.owner,
                "Project": a.project,
                "Category": a.category or "",
                "SubCategory": a.sub_category or "",
                "Activity": a.name,
                "StartWeek": a.start_week,
                "EndWeek": a.end_week,
            }
            row.update(a.weekly_progress)
            rows.append(row)
    df = pd.DataFrame(rows, columns=meta_cols + list(week_labels))
    week_cols = [c for c in df.columns if c not in meta_cols]
    if week_cols:
        df[week_cols] = df[week_cols].fillna(0.0)
    return df


def weekly_frame(weekly: Sequence[WeeklyPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Week": w.week_label, "WeekIndex": w.week_index, "Baseline": w.baseline, "Actual": w.actual, "Variance": w.variance}
            for w in weekly
        ],
        columns=["Week", "WeekIndex", "Baseline", "Actual", "Variance"],
    )


def monthly_frame(monthly: Sequence[MonthlyPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Month": m.month, "Plan": m.plan, "Actual": m.actual} for m in monthly],
        columns=["Month", "Plan", "Actual"],
    )


def forecast_frame(points: Sequence[ForecastPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Day": p.day, "Plan": p.plan, "Actual": p.actual, "Prognosis": p.prognosis} for p in points],
        columns=["Day", "Plan", "Actual", "Prognosis"],
    )


def write_summary_json(path: str | Path, result: ParseResult, monthly: Sequence[MonthlyPoint]) -> None:
    path = Path(path)
    payload = {
        "summary_source": result.summary_source.value,
        "weeks": [c.label for c in result.week_columns],
        "projects": [
            {"id": p.id, "name": p.name, "owner": p.owner, "activities": len(p.activities)} for p in result.projects
        ],
        "weekly": weekly_frame(result.weekly_summary).to_dict(orient="records"),
        "monthly": monthly_frame(monthly).to_dict(orient="records"),
        "warnings": result.warnings,
    }
    path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")


def write_excel_pack(path: str | Path, result: ParseResult, monthly: Sequence[MonthlyPoint]) -> None:
    path = Path(path)
    wb = Workbook()
    wb.remove(wb.active)

    labels = [c.label for c in result.week_columns]
    _add_df_sheet(wb, "Projects", projects_frame(result.projects))
    _add_df_sheet(wb, "Activities", activities_frame(result.projects, labels))
    _add_df_sheet(wb, "Weekly", weekly_frame(result.weekly_summary))
    _add_df_sheet(wb, "Monthly", monthly_frame(monthly))

    wb.save(path)


def _add_df_sheet(wb: Workbook, title: str, df: pd.DataFrame) -> None:
    df = df.astype(object).where(pd.notna(df), None)
    ws = wb.create_sheet(title=title[:31])
    for r in dataframe_to_rows(df, index=False, header=True):
        ws.append(r)
    ws.freeze_panes = "A2"
