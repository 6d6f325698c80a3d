"""Turn numeric columns into a small set of categories."""

from __future__ import annotations

import numpy as np
import pandas as pd


def numeric_to_factor(
    series: pd.Series,
    max_levels: int = 10,
    bins: int = 5,
) -> pd.Series:
    """Convert a numeric column into a categorical column.

    Whole numbers spanning at most ``max_levels`` values get one level per
    integer from the minimum to the maximum, so values that never occur still
    show up as empty categories. Anything else is cut into ``bins``
    equal-width intervals; when the column holds infinities the intervals
    span the finite range and the outermost ones are open-ended. Missing
    values stay missing.
    """
    values = pd.to_numeric(series, errors="coerce").astype(float)
    observed = values.dropna()

    if observed.empty:
        empty = pd.Categorical([np.nan] * len(values), categories=[])
        return pd.Series(empty, index=series.index, name=series.name)

    lo, hi = observed.min(), observed.max()
    is_whole = bool((observed == observed.round()).all())

    if is_whole and hi - lo + 1 <= max_levels:
        categories = list(range(int(lo), int(hi) + 1))
        codes = (values - lo).fillna(-1).astype(int).to_numpy()
        binned = pd.Categorical.from_codes(codes, categories=categories)
        return pd.Series(binned, index=series.index, name=series.name)

    finite = observed[np.isfinite(observed)]
    if len(finite) == len(observed):
        binned = pd.cut(values, bins=bins)
    else:
        # infinities land in open-ended first/last bins
        lo, hi = (finite.min(), finite.max()) if not finite.empty else (0.0, 0.0)
        if lo == hi:
            lo, hi = lo - 0.5, hi + 0.5
        edges = np.linspace(lo, hi, bins + 1)
        edges[0], edges[-1] = -np.inf, np.inf
        binned = pd.cut(values, bins=edges, include_lowest=True)

    binned = binned.cat.rename_categories([str(c) for c in binned.cat.categories])
    binned.name = series.name
    return binned
