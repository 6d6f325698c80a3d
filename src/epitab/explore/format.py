"""Display formatting for tabulation results."""

from __future__ import annotations

import pandas as pd

from epitab.core.types import ColumnKind
from epitab.explore.descriptive import DescriptiveResult


def format_table(result: DescriptiveResult, digits: int | None = None) -> pd.DataFrame:
    """Merge each count/proportion pair into a single "n (p%)" text column.

    The merged column is named after the group level (or "n (%)" without a
    grouper). Total columns are carried over unchanged. The percent sign is
    only added when proportions are per 100. A group level that would take
    the name of the label column, another group or a Total column raises
    ``ValueError``.
    """
    if digits is None:
        digits = result.digits if result.digits is not None else 1
    suffix = "%" if result.multiplier == 100 else ""

    table = result.table
    pretty = pd.DataFrame({result.counter: table[result.counter]})
    total_cols = [c for c, k in result.column_kinds.items() if k is ColumnKind.TOTAL]

    for level, n_col, prop_col in result.pairs:
        name = "n (%)" if level is None else str(level)
        if name in pretty.columns or name in total_cols:
            raise ValueError(
                f"Cannot format: group level '{level}' clashes with column '{name}'"
            )
        pretty[name] = [
            f"{int(n)} ({p:.{digits}f}{suffix})"
            for n, p in zip(table[n_col], table[prop_col])
        ]

    for col in total_cols:
        pretty[col] = table[col]

    return pretty
