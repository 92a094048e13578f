from __future__ import annotations

from pathlib import Path

import pandas as pd

from .types import DailyActualPoint, PlanPoint


def read_export(path: str | Path, encoding: str = "utf-8-sig") -> str:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing required input: {path}")
    return path.read_text(encoding=encoding)


def _read_csv(path: Path, required: list[str]) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Missing required input: {path}")
    df = pd.read_csv(path)
    for col in required:
        if col not in df.columns:
            raise ValueError(f"{path.name} missing required column: {col}")
    df["DayIndex"] = pd.to_numeric(df["DayIndex"], errors="coerce")
    df = df.dropna(subset=["DayIndex"])
    df["DayIndex"] = df["DayIndex"].astype(int)
    for col in required[1:]:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)
    return df.sort_values("DayIndex")


def load_daily_series(path: str | Path) -> list[DailyActualPoint]:
    df = _read_csv(Path(path), ["DayIndex", "PlanCumulative", "ActualCumulative"])
    return [
        DailyActualPoint(
            day_index=int(row.DayIndex),
            plan_cumulative=float(row.PlanCumulative),
            actual_cumulative=float(row.ActualCumulative),
        )
        for row in df.itertuples(index=False)
    ]


def load_plan_schedule(path: str | Path) -> list[PlanPoint]:
    df = _read_csv(Path(path), ["DayIndex", "PlanCumulative"])
    return [PlanPoint(day_index=int(row.DayIndex), plan_cumulative=float(row.PlanCumulative)) for row in df.itertuples(index=False)]
