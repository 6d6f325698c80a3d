"""Counts and proportions of a categorical variable, optionally stratified."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Callable, Hashable

import numpy as np
import pandas as pd

from epitab.core.binning import numeric_to_factor
from epitab.core.codegen import CodeSnippet, call_snippet
from epitab.core.errors import ColumnNotFoundError, RemovedMissingWarning, TypeCoercionWarning
from epitab.core.types import ColumnKind, ColumnType, Levels, classify_column

logger = logging.getLogger(__name__)

MISSING_LABEL = "Missing"
TOTAL_LABEL = "Total"

_RESERVED = ("n", "proportion")

_DEFAULTS = {
    "grouper": None,
    "multiplier": 100,
    "digits": 1,
    "proptotal": False,
    "coltotals": False,
    "rowtotals": False,
    "explicit_missing": True,
}


@dataclass
class DescriptiveResult:
    """Result of a descriptive tabulation."""
    table: pd.DataFrame
    counter: str
    grouper: str | None
    column_kinds: dict[str, ColumnKind]
    pairs: list[tuple[Hashable, str, str]]   # (group level or None, n column, proportion column)
    levels: Levels
    group_levels: Levels | None
    n_total: int
    n_removed: int
    multiplier: float
    digits: int | None
    notes: list[str] = field(default_factory=list)
    code: CodeSnippet = field(default_factory=lambda: CodeSnippet(code=""))

    @property
    def count_columns(self) -> list[str]:
        return [c for c, k in self.column_kinds.items() if k is ColumnKind.COUNT]

    @property
    def proportion_columns(self) -> list[str]:
        return [c for c, k in self.column_kinds.items() if k is ColumnKind.PROPORTION]


@dataclass
class _Normalized:
    values: pd.Series
    levels: Levels
    group_values: pd.Series | None
    group_levels: Levels | None
    n_removed: int
    notes: list[str]


def _resolve_column(df: pd.DataFrame, name: Hashable | None) -> Hashable | None:
    if name is None:
        return None
    matches = sum(1 for col in df.columns if col == name)
    if matches != 1:
        raise ColumnNotFoundError(name, matches)
    return name


def _warn(message: str, category: type[Warning], notes: list[str]) -> None:
    notes.append(message)
    logger.debug(message)
    # descriptive -> _normalize -> _warn
    warnings.warn(message, category, stacklevel=4)


def _categorize(series: pd.Series, column_type: ColumnType) -> tuple[pd.Series, Levels]:
    """Return the column as plain labels (object dtype) plus its levels."""
    values = series.astype(object)
    if column_type is ColumnType.CATEGORICAL:
        levels = Levels(series.cat.categories)
    elif column_type is ColumnType.LOGICAL:
        # display order, not alphabetical
        levels = Levels([True, False])
    else:
        levels = Levels.from_values(values)
    return values, levels


def _normalize(
    df: pd.DataFrame,
    counter: Hashable,
    grouper: Hashable | None,
    explicit_missing: bool,
    binner: Callable[[pd.Series], pd.Series],
) -> _Normalized:
    notes: list[str] = []

    counter_series = df[counter]
    if classify_column(counter_series) is ColumnType.NUMERIC:
        _warn(f"converting `{counter}` to a factor", TypeCoercionWarning, notes)
        counter_series = binner(counter_series)

    values, levels = _categorize(counter_series, classify_column(counter_series))

    group_values = group_levels = None
    if grouper is not None:
        group_series = df[grouper]
        group_values, group_levels = _categorize(group_series, classify_column(group_series))

    missing = values.isna()
    n_removed = 0
    if explicit_missing:
        if missing.any():
            values = values.mask(missing, MISSING_LABEL)
            levels = levels.with_label(MISSING_LABEL)
    else:
        n_removed = int(missing.sum())
        if n_removed > 0:
            _warn(f"Removing {n_removed} missing values", RemovedMissingWarning, notes)
            values = values[~missing]
            if group_values is not None:
                group_values = group_values[~missing]

    # the grouper always keeps its missing values as a column of their own
    if group_values is not None:
        group_missing = group_values.isna()
        if group_missing.any():
            group_values = group_values.mask(group_missing, MISSING_LABEL)
            group_levels = group_levels.with_label(MISSING_LABEL)

    return _Normalized(values, levels, group_values, group_levels, n_removed, notes)


def _aggregate(
    norm: _Normalized,
    counter: Hashable,
    grouper: Hashable | None,
    multiplier: float,
    digits: int | None,
    proptotal: bool,
) -> pd.DataFrame:
    """Count every counter level (within every grouper level) into a long table."""
    n_levels = len(norm.levels)
    n_rows = len(norm.values)
    counter_codes = norm.levels.codes(norm.values)

    if grouper is None:
        group_labels = [None]
        counts = np.bincount(counter_codes, minlength=n_levels).reshape(1, n_levels)
    else:
        group_labels = list(norm.group_levels)
        n_groups = len(group_labels)
        cells = norm.group_levels.codes(norm.group_values) * n_levels + counter_codes
        counts = np.bincount(cells, minlength=n_groups * n_levels).reshape(n_groups, n_levels)

    if proptotal:
        denominator = np.full((counts.shape[0], 1), float(n_rows))
    else:
        denominator = counts.sum(axis=1, keepdims=True).astype(float)

    proportions = np.divide(
        counts, denominator, out=np.zeros(counts.shape), where=denominator > 0,
    ) * multiplier
    if digits is not None:
        proportions = np.round(proportions, digits)

    labels = list(norm.levels)
    data = {}
    if grouper is not None:
        data[grouper] = pd.Series([g for g in group_labels for _ in labels], dtype=object)
    data[counter] = pd.Series(labels * len(group_labels), dtype=object)
    data["n"] = counts.ravel().astype("int64")
    data["proportion"] = proportions.ravel()
    return pd.DataFrame(data)


def _widen(
    long: pd.DataFrame,
    counter: Hashable,
    grouper: Hashable,
    levels: Levels,
    group_levels: Levels,
) -> tuple[pd.DataFrame, dict[str, ColumnKind], list[tuple[Hashable, str, str]]]:
    """Spread grouper levels across (n, proportion) column pairs."""
    labels = list(levels)
    wide = pd.DataFrame({counter: pd.Series(labels, dtype=object)})
    kinds: dict[str, ColumnKind] = {counter: ColumnKind.LABEL}
    pairs = []

    # long holds one block of len(levels) rows per grouper level, in level order
    n_levels = len(labels)
    for position, level in enumerate(group_levels):
        n_col, prop_col = f"{level} n", f"{level} proportion"
        if n_col in kinds or prop_col in kinds:
            raise ValueError(f"Grouper '{grouper}' has two levels that both display as '{level}'")

        block = long.iloc[position * n_levels:(position + 1) * n_levels]
        wide[n_col] = block["n"].to_numpy()
        wide[prop_col] = block["proportion"].to_numpy()
        kinds[n_col] = ColumnKind.COUNT
        kinds[prop_col] = ColumnKind.PROPORTION
        pairs.append((level, n_col, prop_col))

    count_cols = [c for c, k in kinds.items() if k is ColumnKind.COUNT]
    prop_cols = [c for c, k in kinds.items() if k is ColumnKind.PROPORTION]
    if count_cols:
        wide[count_cols] = wide[count_cols].fillna(0).astype("int64")
        wide[prop_cols] = wide[prop_cols].fillna(0.0)

    return wide, kinds, pairs


def _add_totals(
    table: pd.DataFrame,
    kinds: dict[str, ColumnKind],
    counter: Hashable,
    digits: int | None,
    coltotals: bool,
    rowtotals: bool,
) -> pd.DataFrame:
    if coltotals:
        row = {counter: TOTAL_LABEL}
        for col, kind in kinds.items():
            if kind is ColumnKind.LABEL:
                continue
            total = table[col].sum()
            if kind is ColumnKind.PROPORTION and digits is not None:
                total = round(float(total), digits)
            row[col] = total
        total_row = pd.DataFrame([row], columns=table.columns)
        if len(table):
            table = pd.concat([table, total_row], ignore_index=True)
        else:
            table = total_row.astype({counter: object})

    if rowtotals:
        if TOTAL_LABEL in table.columns:
            raise ValueError(f"Cannot add row totals: a column is already named '{TOTAL_LABEL}'")
        count_cols = [c for c, k in kinds.items() if k is ColumnKind.COUNT]
        table[TOTAL_LABEL] = table[count_cols].sum(axis=1).astype("int64")
        kinds[TOTAL_LABEL] = ColumnKind.TOTAL

    return table


def descriptive(
    df: pd.DataFrame,
    counter: str,
    grouper: str | None = None,
    multiplier: float = 100,
    digits: int | None = 1,
    proptotal: bool = False,
    coltotals: bool = False,
    rowtotals: bool = False,
    explicit_missing: bool = True,
    binner: Callable[[pd.Series], pd.Series] | None = None,
) -> DescriptiveResult:
    """Count the levels of *counter*, optionally by the levels of *grouper*.

    Parameters
    ----------
    df : DataFrame
        Input records. Never modified.
    counter : str
        Column whose levels become the rows of the table. Numeric columns are
        converted with *binner* (with a ``TypeCoercionWarning``); boolean
        columns get the levels ``[True, False]``.
    grouper : str, optional
        Column whose levels become (n, proportion) column pairs. Missing
        grouper values always get their own "Missing" column pair.
    multiplier : float
        Scale of the proportions (100 gives percentages).
    digits : int or None
        Decimal places kept in proportions; None keeps full precision.
    proptotal : bool
        If True, proportions are relative to all tabulated rows instead of
        the rows of the same grouper level.
    coltotals : bool
        Append a "Total" row with column sums.
    rowtotals : bool
        Append a "Total" column summing the count columns only.
    explicit_missing : bool
        Defaults to True: missing counter values are tabulated as a
        "Missing" row. If False they are dropped and a
        ``RemovedMissingWarning`` reports how many.
    binner : callable, optional
        Numeric-to-categorical converter, default ``numeric_to_factor``.

    Raises
    ------
    ColumnNotFoundError
        If *counter* or *grouper* does not name exactly one column.
    ValueError
        If *counter* and *grouper* are the same column, or either is named
        "n" or "proportion".
    """
    counter = _resolve_column(df, counter)
    grouper = _resolve_column(df, grouper)
    if grouper is not None and grouper == counter:
        raise ValueError("counter and grouper must be different columns")
    for name in (counter, grouper):
        if name in _RESERVED:
            raise ValueError(f"Column name {name!r} clashes with an output column; rename it first")
    if binner is None:
        binner = numeric_to_factor

    norm = _normalize(df, counter, grouper, explicit_missing, binner)
    long = _aggregate(norm, counter, grouper, multiplier, digits, proptotal)

    if grouper is None:
        table = long
        kinds = {
            counter: ColumnKind.LABEL,
            "n": ColumnKind.COUNT,
            "proportion": ColumnKind.PROPORTION,
        }
        pairs = [(None, "n", "proportion")]
    else:
        table, kinds, pairs = _widen(long, counter, grouper, norm.levels, norm.group_levels)

    table = _add_totals(table, kinds, counter, digits, coltotals, rowtotals)

    logger.debug(
        "Tabulated %s by %s: %d levels, %d rows (%d removed)",
        counter, grouper, len(norm.levels), len(norm.values), norm.n_removed,
    )

    code = call_snippet(
        "descriptive",
        [counter],
        {
            "grouper": grouper,
            "multiplier": multiplier,
            "digits": digits,
            "proptotal": proptotal,
            "coltotals": coltotals,
            "rowtotals": rowtotals,
            "explicit_missing": explicit_missing,
        },
        _DEFAULTS,
    )

    return DescriptiveResult(
        table=table,
        counter=counter,
        grouper=grouper,
        column_kinds=kinds,
        pairs=pairs,
        levels=norm.levels,
        group_levels=norm.group_levels,
        n_total=len(norm.values),
        n_removed=norm.n_removed,
        multiplier=multiplier,
        digits=digits,
        notes=norm.notes,
        code=code,
    )
