from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ParserConfig, default_parser_config
from .forecast import forecast_progress
from .io import load_daily_series, load_plan_schedule, read_export
from .metrics import compute_work_metrics
from .periods import weekly_to_monthly
from .pipeline import parse_weekly_export
from .reporting import forecast_frame, write_excel_pack, write_summary_json
from .types import MalformedInputError

app = typer.Typer(add_completion=False, help="Weekly S-curve progress ingestion and forecasting.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline details.")):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(console=console)])


def _parse_date(value: str, name: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise typer.BadParameter(f"{name} must be YYYY-MM-DD, got {value!r}") from e


@app.command()
def parse(
    input: Path = typer.Argument(..., exists=True, dir_okay=False, help="Semicolon-delimited weekly export."),
    out: Path = typer.Option(..., help="Output directory for summary.json and progress_pack.xlsx."),
    config: Optional[Path] = typer.Option(None, help="Parser config YAML (default uses packaged config)."),
):
    cfg = ParserConfig.from_yaml(config) if config else default_parser_config()
    try:
        result = parse_weekly_export(read_export(input), cfg)
    except MalformedInputError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    monthly = weekly_to_monthly(result.weekly_summary, cfg)
    out.mkdir(parents=True, exist_ok=True)
    write_summary_json(out / "summary.json", result, monthly)
    write_excel_pack(out / "progress_pack.xlsx", result, monthly)

    table = Table(title=f"Projects ({result.summary_source.value} summary)")
    table.add_column("Project")
    table.add_column("Owner")
    table.add_column("Activities", justify="right")
    for project in result.projects:
        table.add_row(project.name, project.owner, str(len(project.activities)))
    console.print(table)
    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {warning}")
    console.print(f"Wrote progress pack to {out}")


@app.command()
def forecast(
    daily: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with DayIndex, PlanCumulative, ActualCumulative."),
    target: float = typer.Option(..., help="Target cumulative value the prognosis is clamped to."),
    plan: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="CSV with DayIndex, PlanCumulative."),
    out: Optional[Path] = typer.Option(None, help="Write the forecast to this CSV instead of printing it."),
):
    try:
        series = load_daily_series(daily)
        schedule = load_plan_schedule(plan) if plan else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    frame = forecast_frame(forecast_progress(series, schedule, target))
    if out:
        frame.to_csv(out, index=False)
        console.print(f"Wrote {len(frame.index)} forecast days to {out}")
        return

    table = Table(title=f"Forecast (target {target:g})")
    for col in frame.columns:
        table.add_column(col, justify="right")
    for row in frame.itertuples(index=False):
        table.add_row(*("" if v is None or v != v else f"{v:g}" for v in row))
    console.print(table)


@app.command()
def metrics(
    daily: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with DayIndex, PlanCumulative, ActualCumulative."),
    target: float = typer.Option(..., help="Target cumulative value."),
    start: str = typer.Option(..., help="Work start date (YYYY-MM-DD)."),
    end: str = typer.Option(..., help="Work end date (YYYY-MM-DD)."),
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD); defaults to today."),
    manpower: int = typer.Option(0, min=0, help="Existing manpower."),
    productivity: float = typer.Option(0.0, min=0.0, help="Target productivity per person per day."),
):
    """Print headline work metrics for a daily-tracked series."""
    try:
        series = load_daily_series(daily)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    result = compute_work_metrics(
        series,
        target=target,
        start_date=_parse_date(start, "start"),
        end_date=_parse_date(end, "end"),
        today=_parse_date(today, "today") if today else date.today(),
        manpower_existing=manpower,
        productivity_target=productivity,
    )
    table = Table(title="Work metrics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in asdict(result).items():
        table.add_row(name, f"{value:,.2f}" if isinstance(value, float) else str(value))
    console.print(table)
