from __future__ import annotations

import logging

from .aggregate import group_projects, resolve_weekly_summary
from .classify import ControlMatcher, extract_activities
from .config import ParserConfig, default_parser_config
from .ingest import tabulate
from .types import ParseResult, SummarySource

logger = logging.getLogger(__name__)


def parse_weekly_export(
    text: str,
    config: ParserConfig | None = None,
    is_control: ControlMatcher | None = None,
) -> ParseResult:
    """Turn a semicolon-delimited weekly progress export into projects and a weekly S-curve.

    Raises ``MalformedInputError`` when fewer than two non-blank lines exist;
    every other irregularity degrades to a default and is reported in
    ``ParseResult.warnings``.
    """
    config = config or default_parser_config()
    warnings: list[str] = []

    table = tabulate(text, config)
    logger.debug("Tabulated %d lines, %d week columns", len(table.lines), len(table.week_columns))
    if not table.week_columns:
        warnings.append("Header row has no week columns; activities carry no weekly progress.")

    extraction = extract_activities(table.data_rows, table.week_columns, config, is_control)
    logger.debug(
        "Extracted %d activities (%d control rows, %d short rows)",
        len(extraction.activities),
        extraction.control_rows,
        extraction.short_rows,
    )
    if extraction.short_rows:
        warnings.append(f"{extraction.short_rows} row(s) had fewer than {config.min_columns} cells and were skipped.")

    projects = group_projects(extraction.activities)
    weekly, source = resolve_weekly_summary(table.rows, table.week_columns, projects, config)
    if source is SummarySource.SYNTHESIZED:
        warnings.append("No Baseline/Kumulatif summary rows found; weekly actuals synthesized from activities.")

    logger.info(
        "Parsed %d activities across %d projects, %d weeks (summary=%s)",
        len(extraction.activities),
        len(projects),
        len(weekly),
        source.value,
    )
    return ParseResult(
        projects=projects,
        weekly_summary=weekly,
        summary_source=source,
        week_columns=table.week_columns,
        warnings=warnings,
    )
