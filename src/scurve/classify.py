"""Control/activity row classification and activity record extraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from .config import ParserConfig
from .context import fold_context
from .normalize import cell, parse_percentage
from .types import ActivityRecord, RowContext, RowKind, WeekColumn

ControlMatcher = Callable[[str], bool]


def keyword_matcher(markers: Iterable[str]) -> ControlMatcher:
    """Match labels containing any marker, ignoring case."""
    lowered = tuple(m.lower() for m in markers if m)

    def _is_control(label: str) -> bool:
        text = label.lower()
        return any(marker in text for marker in lowered)

    return _is_control


def classify_row(
    cells: Sequence[str],
    config: ParserConfig,
    is_control: ControlMatcher | None = None,
) -> RowKind:
    label = cell(cells, config.activity_column)
    if not label:
        return RowKind.CONTROL
    matcher = is_control or keyword_matcher(config.control_markers)
    return RowKind.CONTROL if matcher(label) else RowKind.ACTIVITY


def build_activity(
    context: RowContext,
    cells: Sequence[str],
    week_columns: Sequence[WeekColumn],
    config: ParserConfig,
) -> ActivityRecord | None:
    """Build a record from an activity row; rows without positive progress give None."""
    progress: dict[str, float] = {}
    ordinals: list[int] = []
    for ordinal, column in enumerate(week_columns):
        value = parse_percentage(cell(cells, column.column_index))
        if value > 0:
            progress[column.label] = value
            ordinals.append(ordinal)
    if not progress:
        return None
    return ActivityRecord(
        owner=context.owner,
        project=context.project,
        category=context.category or None,
        sub_category=context.sub_category or None,
        name=cell(cells, config.activity_column),
        weekly_progress=progress,
        start_week=ordinals[0],
        end_week=ordinals[-1],
    )


@dataclass(frozen=True)
class Extraction:
    context: RowContext
    activities: list[ActivityRecord]
    short_rows: int
    control_rows: int


def extract_activities(
    rows: Iterable[Sequence[str]],
    week_columns: Sequence[WeekColumn],
    config: ParserConfig,
    is_control: ControlMatcher | None = None,
) -> Extraction:
    """Fold over data rows, carrying context and collecting activity records.

    Rows with fewer than ``config.min_columns`` cells are ignored entirely and
    do not touch the carried context. Control rows update context but yield
    no record.
    """
    matcher = is_control or keyword_matcher(config.control_markers)
    rows = list(rows)
    usable = [cells for cells in rows if len(cells) >= config.min_columns]

    activities: list[ActivityRecord] = []
    control_rows = 0
    context = RowContext()
    for context, cells in fold_context(usable, config.context_columns):
        if classify_row(cells, config, matcher) is RowKind.CONTROL:
            control_rows += 1
            continue
        record = build_activity(context, cells, week_columns, config)
        if record is not None:
            activities.append(record)

    return Extraction(
        context=context,
        activities=activities,
        short_rows=len(rows) - len(usable),
        control_rows=control_rows,
    )
