"""Tabulation of the raw export: rows, cells and the dynamic week columns."""

from __future__ import annotations

from dataclasses import dataclass
import re

from .config import ParserConfig
from .normalize import split_cells, split_lines
from .types import MalformedInputError, WeekColumn

_WEEK_HEADER = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class Table:
    lines: list[str]
    rows: list[list[str]]
    week_columns: list[WeekColumn]

    @property
    def header(self) -> list[str]:
        return self.rows[0]

    @property
    def data_rows(self) -> list[list[str]]:
        # Row 2 is a sub-header and carries nothing we use.
        return self.rows[2:]


def discover_week_columns(header: list[str], config: ParserConfig) -> list[WeekColumn]:
    """Return the header cells holding a bare integer, labelled in month-week order.

    Scanning starts at ``config.week_start_column``; non-integer cells are
    skipped and the scan stops once the week cap is reached.
    """
    columns: list[WeekColumn] = []
    cap = config.week_cap
    for index in range(config.week_start_column, len(header)):
        if len(columns) >= cap:
            break
        if _WEEK_HEADER.match(header[index]):
            columns.append(WeekColumn(column_index=index, label=config.week_label(len(columns))))
    return columns


def tabulate(text: str, config: ParserConfig) -> Table:
    lines = split_lines(text)
    if len(lines) < 2:
        raise MalformedInputError(f"Export needs a header and at least one more line; found {len(lines)} usable line(s).")
    rows = [split_cells(line, config.delimiter) for line in lines]
    return Table(lines=lines, rows=rows, week_columns=discover_week_columns(rows[0], config))
