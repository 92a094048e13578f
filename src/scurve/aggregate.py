from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from .config import ParserConfig
from .normalize import cell, parse_percentage
from .types import ActivityRecord, ProjectRecord, SummarySource, WeekColumn, WeeklyPoint


def group_projects(activities: Iterable[ActivityRecord]) -> list[ProjectRecord]:
    """Bucket activities by the exact (owner, project) pair, in first-seen order."""
    buckets: dict[tuple[str, str], list[ActivityRecord]] = {}
    for activity in activities:
        buckets.setdefault((activity.owner, activity.project), []).append(activity)
    return [
        ProjectRecord(id=f"{owner}-{project}", name=project, owner=owner, activities=items)
        for (owner, project), items in buckets.items()
    ]


def _summary_label(cells: Sequence[str], config: ParserConfig) -> str:
    for index in config.summary_label_columns:
        label = cell(cells, index)
        if label:
            return label.lower()
    return ""


def find_summary_rows(
    rows: Sequence[Sequence[str]],
    config: ParserConfig,
) -> tuple[Sequence[str] | None, Sequence[str] | None]:
    """Locate the cumulative baseline and actual rows in the trailing window.

    The window is scanned from the last line backward; the first match of
    each kind wins. A label matching both keywords counts as baseline.
    """
    baseline: Sequence[str] | None = None
    actual: Sequence[str] | None = None
    window = rows[-config.summary_window:] if config.summary_window > 0 else []
    for cells in reversed(window):
        label = _summary_label(cells, config)
        if not label:
            continue
        if config.baseline_keyword.lower() in label:
            if baseline is None:
                baseline = cells
        elif config.actual_keyword.lower() in label:
            if actual is None:
                actual = cells
    return baseline, actual


def _row_series(cells: Sequence[str] | None, week_columns: Sequence[WeekColumn]) -> list[float]:
    if cells is None:
        return [0.0] * len(week_columns)
    return [parse_percentage(cell(cells, col.column_index)) for col in week_columns]


def synthesize_actuals(projects: Sequence[ProjectRecord], week_columns: Sequence[WeekColumn]) -> list[float]:
    """Sum every activity's progress per week."""
    labels = [col.label for col in week_columns]
    progress = [a.weekly_progress for p in projects for a in p.activities]
    totals = pd.DataFrame(progress).reindex(columns=labels).astype(float).fillna(0.0).sum()
    return [float(totals.get(label, 0.0)) for label in labels]


def resolve_weekly_summary(
    rows: Sequence[Sequence[str]],
    week_columns: Sequence[WeekColumn],
    projects: Sequence[ProjectRecord],
    config: ParserConfig,
) -> tuple[list[WeeklyPoint], SummarySource]:
    baseline_row, actual_row = find_summary_rows(rows, config)
    if baseline_row is not None or actual_row is not None:
        baseline = _row_series(baseline_row, week_columns)
        actual = _row_series(actual_row, week_columns)
        source = SummarySource.EXPLICIT
    else:
        baseline = [0.0] * len(week_columns)
        actual = synthesize_actuals(projects, week_columns)
        source = SummarySource.SYNTHESIZED

    points = [
        WeeklyPoint(week_label=col.label, week_index=idx, baseline=baseline[idx], actual=actual[idx])
        for idx, col in enumerate(week_columns)
    ]
    return points, source


def unique_owners(projects: Iterable[ProjectRecord]) -> list[str]:
    return sorted({p.owner for p in projects if p.owner})


def unique_categories(projects: Iterable[ProjectRecord]) -> list[str]:
    return sorted({a.category for p in projects for a in p.activities if a.category})


def filter_activities(
    projects: Iterable[ProjectRecord],
    owner: str | None = None,
    category: str | None = None,
    search: str | None = None,
) -> list[ActivityRecord]:
    """Activities matching every supplied filter; search looks at activity and project names."""
    needle = search.strip().lower() if search else ""
    matched: list[ActivityRecord] = []
    for project in projects:
        for activity in project.activities:
            if owner and activity.owner != owner:
                continue
            if category and activity.category != category:
                continue
            if needle and needle not in activity.name.lower() and needle not in project.name.lower():
                continue
            matched.append(activity)
    return matched
