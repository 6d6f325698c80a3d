"""Column classification, category levels and output column kinds."""

from __future__ import annotations

from enum import Enum
from typing import Any, Hashable, Iterable, Iterator

import numpy as np
import pandas as pd


class ColumnType(Enum):
    """How a column is turned into categories before counting."""
    NUMERIC = "numeric"
    LOGICAL = "logical"
    CATEGORICAL = "categorical"
    DATETIME = "datetime"
    TEXT = "text"


class ColumnKind(Enum):
    """Role of a column in a tabulation output."""
    LABEL = "label"
    COUNT = "count"
    PROPORTION = "proportion"
    TOTAL = "total"


_NUMERIC_INFERRED = {"integer", "floating", "mixed-integer-float", "decimal"}


def classify_column(series: pd.Series) -> ColumnType:
    """Classify a column for tabulation.

    Logic:
    - pandas categorical dtype → CATEGORICAL (declared categories are kept)
    - bool dtype, or only bools among non-missing values → LOGICAL
    - numeric dtype, or only numbers among non-missing values → NUMERIC
    - datetime dtype → DATETIME
    - else → TEXT
    """
    if isinstance(series.dtype, pd.CategoricalDtype):
        return ColumnType.CATEGORICAL

    if pd.api.types.is_bool_dtype(series):
        return ColumnType.LOGICAL

    if pd.api.types.is_datetime64_any_dtype(series):
        return ColumnType.DATETIME

    if pd.api.types.is_numeric_dtype(series):
        return ColumnType.NUMERIC

    inferred = pd.api.types.infer_dtype(series, skipna=True)
    if inferred == "boolean":
        return ColumnType.LOGICAL
    if inferred in _NUMERIC_INFERRED:
        return ColumnType.NUMERIC

    return ColumnType.TEXT


def _key(label: Hashable) -> tuple[bool, Hashable]:
    # True == 1 and False == 0 in Python; keep booleans apart from numbers
    return isinstance(label, (bool, np.bool_)), label


class Levels:
    """Ordered, duplicate-free set of category labels.

    Output row order (for a counter) and column block order (for a grouper)
    follow the order of ``labels``. Booleans are never merged with numbers
    that compare equal to them (``True`` and ``1`` are two levels).
    """

    def __init__(self, labels: Iterable[Hashable]) -> None:
        self._index: dict[tuple[bool, Hashable], int] = {}
        unique = []
        for label in labels:
            key = _key(label)
            if key not in self._index:
                self._index[key] = len(unique)
                unique.append(label)
        self.labels: tuple[Hashable, ...] = tuple(unique)

    @classmethod
    def from_values(cls, values: pd.Series) -> "Levels":
        """Build levels from the distinct non-missing values, sorted."""
        observed = cls(values.dropna()).labels
        try:
            ordered = sorted(observed)
        except TypeError:
            # mixed types, e.g. numbers and strings in one object column
            ordered = sorted(observed, key=str)
        return cls(ordered)

    def with_label(self, label: Hashable) -> "Levels":
        """Return new levels with *label* appended (no-op if already present)."""
        if label in self:
            return self
        return Levels(self.labels + (label,))

    def index(self, label: Hashable) -> int:
        return self._index[_key(label)]

    def codes(self, values: pd.Series) -> np.ndarray:
        """Map each value to its level position."""
        index = self._index
        return np.fromiter((index[_key(v)] for v in values), dtype=np.intp, count=len(values))

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.labels)

    def __contains__(self, label: Any) -> bool:
        return _key(label) in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Levels):
            return list(self._index) == list(other._index)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._index))

    def __repr__(self) -> str:
        return f"Levels({list(self.labels)!r})"
