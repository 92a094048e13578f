from __future__ import annotations

import math
from typing import Sequence


def split_lines(text: str) -> list[str]:
    """Split an export into trimmed, non-blank lines."""
    return [stripped for stripped in (line.strip() for line in text.splitlines()) if stripped]


def split_cells(line: str, delimiter: str = ";") -> list[str]:
    return [cell.strip() for cell in line.split(delimiter)]


def cell(cells: Sequence[str], index: int) -> str:
    return cells[index] if 0 <= index < len(cells) else ""


def parse_percentage(value: str | None) -> float:
    """Parse "18%", "0,082%" or "42.5" into a float; blank or unparsable text is 0."""
    if value is None:
        return 0.0
    cleaned = value.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    cleaned = cleaned.replace(",", ".", 1).strip()
    if not cleaned:
        return 0.0
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0
