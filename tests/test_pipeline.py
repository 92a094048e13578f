"""End-to-end parsing of weekly progress exports."""

from __future__ import annotations

import pytest

from scurve.aggregate import (
    filter_activities,
    find_summary_rows,
    group_projects,
    unique_categories,
    unique_owners,
)
from scurve.config import ParserConfig
from scurve.pipeline import parse_weekly_export
from scurve.types import ActivityRecord, MalformedInputError, SummarySource

MINIMAL = "\n".join(
    [
        "PIC;Project;Category;SubCategory;Activity;1;2;3;4",
        ";;;;;Juni;;;",
        "ARIEF;Mahakam;Env;Survey;Site Survey;50;100;0;0",
        ";;;;Planting;0;0;20;40",
    ]
)

FULL = "\n".join(
    [
        "PIC;Project;Kategori;Sub Kategori;Aktivitas;1;2;3;4;1;2;3;4",
        ";;;;;Juni;;;;Juli;;;",
        "ARIEF;Mahakam;Env;Survey;Site Survey;50%;100%;;;;;;",
        ";;;;Planting;;;20%;40%;;;;",
        ";;Admin;;Permit;;;;;10%;;;",
        "DANTA;Kutai;Env;Nursery;Seedling;;0,5%;;;;;;",
        ";;;;Beban Tiap Minggu;1%;2%;3%;4%;;;;",
        ";;;Baseline Scurve;;10%;20%;30%;40%;50%;60%;70%;80%",
        ";;;Kumulatif Realisasi;;5%;15%;25%;;;;;",
    ]
)


def _activity(owner: str, project: str, name: str) -> ActivityRecord:
    return ActivityRecord(owner=owner, project=project, name=name, weekly_progress={"Juni-1": 1.0})


class TestMinimalExport:
    def test_single_project_with_two_activities(self):
        result = parse_weekly_export(MINIMAL)
        assert [p.id for p in result.projects] == ["ARIEF-Mahakam"]
        project = result.projects[0]
        assert project.name == "Mahakam"
        assert project.owner == "ARIEF"

        survey, planting = project.activities
        assert survey.name == "Site Survey"
        assert survey.weekly_progress == {"Juni-1": 50.0, "Juni-2": 100.0}
        assert (survey.start_week, survey.end_week) == (0, 1)

        assert planting.name == "Planting"
        assert planting.weekly_progress == {"Juni-3": 20.0, "Juni-4": 40.0}
        assert (planting.start_week, planting.end_week) == (2, 3)
        assert (planting.owner, planting.project) == ("ARIEF", "Mahakam")

    def test_summary_falls_back_to_activity_sums(self):
        result = parse_weekly_export(MINIMAL)
        assert result.summary_source is SummarySource.SYNTHESIZED
        assert [w.week_label for w in result.weekly_summary] == ["Juni-1", "Juni-2", "Juni-3", "Juni-4"]
        assert [w.week_index for w in result.weekly_summary] == [0, 1, 2, 3]
        assert [w.actual for w in result.weekly_summary] == [50.0, 100.0, 20.0, 40.0]
        assert all(w.baseline == 0.0 for w in result.weekly_summary)
        assert any("synthesized" in w for w in result.warnings)

    def test_parsing_is_idempotent(self):
        assert parse_weekly_export(MINIMAL) == parse_weekly_export(MINIMAL)
        assert parse_weekly_export(FULL) == parse_weekly_export(FULL)


class TestFullExport:
    def test_projects_and_context(self):
        result = parse_weekly_export(FULL)
        assert [p.id for p in result.projects] == ["ARIEF-Mahakam", "DANTA-Kutai"]

        mahakam = result.projects[0]
        assert [a.name for a in mahakam.activities] == ["Site Survey", "Planting", "Permit"]
        permit = mahakam.activities[2]
        assert permit.category == "Admin"
        assert permit.sub_category == "Survey"
        assert permit.weekly_progress == {"Juli-1": 10.0}
        assert (permit.start_week, permit.end_week) == (4, 4)

        seedling = result.projects[1].activities[0]
        assert seedling.weekly_progress == {"Juni-2": pytest.approx(0.5)}

    def test_explicit_summary_rows(self):
        result = parse_weekly_export(FULL)
        assert result.summary_source is SummarySource.EXPLICIT
        assert len(result.weekly_summary) == 8
        assert [w.baseline for w in result.weekly_summary] == [10, 20, 30, 40, 50, 60, 70, 80]
        assert [w.actual for w in result.weekly_summary] == [5, 15, 25, 0, 0, 0, 0, 0]
        assert result.weekly_summary[1].variance == pytest.approx(-5.0)
        assert result.warnings == []

    def test_latest_summary_row_wins(self):
        text = FULL + "\n;;;Kumulatif Realisasi;;6%;16%;26%;36%;;;;"
        result = parse_weekly_export(text)
        assert [w.actual for w in result.weekly_summary][:4] == [6, 16, 26, 36]

    def test_summary_row_outside_window_is_ignored(self):
        filler = [f";;;;Task {i};1%;;;;;;;" for i in range(12)]
        text = FULL + "\n" + "\n".join(filler)
        result = parse_weekly_export(text)
        assert result.summary_source is SummarySource.SYNTHESIZED

    def test_only_actual_row_leaves_zero_baseline(self):
        text = MINIMAL + "\n;;;;Kumulatif Realisasi;5%;10%;15%;20%"
        result = parse_weekly_export(text)
        assert result.summary_source is SummarySource.EXPLICIT
        assert [w.actual for w in result.weekly_summary] == [5, 10, 15, 20]
        assert [w.baseline for w in result.weekly_summary] == [0, 0, 0, 0]


class TestLenientParsing:
    def test_too_few_lines_raises(self):
        with pytest.raises(MalformedInputError):
            parse_weekly_export("PIC;Project;Category;SubCategory;Activity;1\n\n")

    def test_header_without_weeks_degrades(self):
        text = "PIC;Project;Cat;Sub;Activity;A;B\n;;;;;;\nX;P;C;S;Dig;10;20\n"
        result = parse_weekly_export(text)
        assert result.week_columns == []
        assert result.projects == []
        assert result.weekly_summary == []
        assert any("no week columns" in w for w in result.warnings)

    def test_short_rows_reported(self):
        text = MINIMAL + "\nstray;row"
        result = parse_weekly_export(text)
        assert any("fewer than 5 cells" in w for w in result.warnings)
        assert len(result.projects[0].activities) == 2

    def test_injected_matcher_keeps_marker_named_activity(self):
        text = MINIMAL + "\n;;;;Progres Pembibitan;0;0;0;5"
        default = parse_weekly_export(text)
        assert [a.name for a in default.projects[0].activities] == ["Site Survey", "Planting"]

        custom = parse_weekly_export(text, is_control=lambda label: label.lower().startswith("kumulatif"))
        assert [a.name for a in custom.projects[0].activities][-1] == "Progres Pembibitan"

    def test_custom_delimiter_via_config(self):
        cfg = ParserConfig(delimiter=",")
        result = parse_weekly_export(MINIMAL.replace(";", ","), cfg)
        assert result.projects[0].id == "ARIEF-Mahakam"


class TestGrouping:
    def test_grouping_is_exact_and_ordered(self):
        projects = group_projects(
            [
                _activity("A", "P", "one"),
                _activity("B", "P", "two"),
                _activity("A", "P", "three"),
                _activity("A", "p", "four"),
                _activity("A ", "P", "five"),
            ]
        )
        assert [p.id for p in projects] == ["A-P", "B-P", "A-p", "A -P"]
        assert [a.name for a in projects[0].activities] == ["one", "three"]

    def test_find_summary_rows_prefers_column_four_label(self):
        rows = [["", "", "", "Baseline Scurve", "Kumulatif", "1"]]
        baseline, actual = find_summary_rows(rows, ParserConfig())
        assert baseline is rows[0]
        assert actual is None

    def test_filters_and_lookups(self):
        result = parse_weekly_export(FULL)
        assert unique_owners(result.projects) == ["ARIEF", "DANTA"]
        assert unique_categories(result.projects) == ["Admin", "Env"]
        assert [a.name for a in filter_activities(result.projects, owner="DANTA")] == ["Seedling"]
        assert [a.name for a in filter_activities(result.projects, category="Admin")] == ["Permit"]
        assert [a.name for a in filter_activities(result.projects, search="kutai")] == ["Seedling"]
        assert [a.name for a in filter_activities(result.projects, owner="ARIEF", search="plant")] == ["Planting"]
