"""Forward-fill of the merged owner/project/category/sub-category cells."""

from __future__ import annotations

from itertools import accumulate
from typing import Iterable, Sequence

from .normalize import cell
from .types import RowContext


def carry_context(
    context: RowContext,
    cells: Sequence[str],
    columns: Sequence[int] = (0, 1, 2, 3),
) -> RowContext:
    """Overwrite each context field whose cell is non-blank; blanks inherit."""
    owner, project, category, sub_category = (cell(cells, i) for i in columns)
    return RowContext(
        owner=owner or context.owner,
        project=project or context.project,
        category=category or context.category,
        sub_category=sub_category or context.sub_category,
    )


def fold_context(
    rows: Iterable[Sequence[str]],
    columns: Sequence[int] = (0, 1, 2, 3),
    initial: RowContext | None = None,
) -> list[tuple[RowContext, Sequence[str]]]:
    """Pair every row with the context in effect after reading it."""
    rows = list(rows)
    contexts = accumulate(rows, lambda ctx, cells: carry_context(ctx, cells, columns), initial=initial or RowContext())
    next(contexts)
    return list(zip(contexts, rows))
