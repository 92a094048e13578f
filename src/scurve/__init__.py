"""Weekly S-curve progress ingestion and forecasting."""

from .forecast import forecast_progress, trailing_rate
from .periods import weekly_to_monthly
from .pipeline import parse_weekly_export
from .types import MalformedInputError

__all__ = [
    "MalformedInputError",
    "forecast_progress",
    "parse_weekly_export",
    "trailing_rate",
    "weekly_to_monthly",
]
