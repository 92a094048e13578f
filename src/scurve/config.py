from __future__ import annotations

from dataclasses import dataclass
import importlib.resources
from pathlib import Path
from typing import Any, Mapping

import yaml


@dataclass(frozen=True)
class ParserConfig:
    delimiter: str = ";"
    min_columns: int = 5
    context_columns: tuple[int, int, int, int] = (0, 1, 2, 3)
    activity_column: int = 4
    week_start_column: int = 4
    months: tuple[str, ...] = (
        "Juni",
        "Juli",
        "Agustus",
        "September",
        "Oktober",
        "November",
        "Desember",
        "Januari",
        "Februari",
        "Maret",
    )
    weeks_per_month: int = 4
    max_weeks: int = 40
    control_markers: tuple[str, ...] = (
        "Baseline",
        "Kumulatif",
        "Beban Tiap Minggu",
        "Realisasi Tiap Minggu",
        "Progres",
    )
    summary_label_columns: tuple[int, ...] = (3, 4)
    summary_window: int = 10
    baseline_keyword: str = "baseline"
    actual_keyword: str = "kumulatif"

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ValueError("delimiter must be a non-empty string")
        if not self.months:
            raise ValueError("months must list at least one month name")
        if self.weeks_per_month < 1:
            raise ValueError(f"weeks_per_month must be positive, got {self.weeks_per_month}")
        if len(self.context_columns) != 4:
            raise ValueError(
                f"context_columns needs 4 indices (owner, project, category, sub-category), got {len(self.context_columns)}"
            )

    @property
    def week_cap(self) -> int:
        return min(self.max_weeks, len(self.months) * self.weeks_per_month)

    def week_label(self, ordinal: int) -> str:
        month = self.months[ordinal // self.weeks_per_month]
        return f"{month}-{ordinal % self.weeks_per_month + 1}"

    @staticmethod
    def from_mapping(raw: Mapping[str, Any]) -> "ParserConfig":
        base = ParserConfig()
        raw = raw or {}

        def _ints(key: str, default: tuple[int, ...]) -> tuple[int, ...]:
            values = raw.get(key)
            return default if values is None else tuple(int(v) for v in values)

        def _strs(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
            values = raw.get(key)
            return default if values is None else tuple(str(v) for v in values)

        return ParserConfig(
            delimiter=str(raw.get("delimiter", base.delimiter)),
            min_columns=int(raw.get("min_columns", base.min_columns)),
            context_columns=_ints("context_columns", base.context_columns),  # type: ignore[arg-type]
            activity_column=int(raw.get("activity_column", base.activity_column)),
            week_start_column=int(raw.get("week_start_column", base.week_start_column)),
            months=_strs("months", base.months),
            weeks_per_month=int(raw.get("weeks_per_month", base.weeks_per_month)),
            max_weeks=int(raw.get("max_weeks", base.max_weeks)),
            control_markers=_strs("control_markers", base.control_markers),
            summary_label_columns=_ints("summary_label_columns", base.summary_label_columns),
            summary_window=int(raw.get("summary_window", base.summary_window)),
            baseline_keyword=str(raw.get("baseline_keyword", base.baseline_keyword)),
            actual_keyword=str(raw.get("actual_keyword", base.actual_keyword)),
        )

    @staticmethod
    def from_yaml(path: str | Path) -> "ParserConfig":
        path = Path(path)
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        return ParserConfig.from_mapping(raw)


def default_parser_config() -> ParserConfig:
    text = importlib.resources.files("scurve.resources").joinpath("default_parser.yaml").read_text(encoding="utf-8")
    return ParserConfig.from_mapping(yaml.safe_load(text))
