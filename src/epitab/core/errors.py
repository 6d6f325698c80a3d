"""Errors and warnings raised while tabulating."""

from __future__ import annotations


class ColumnNotFoundError(LookupError):
    """A column selector matched zero or several columns of the table."""

    def __init__(self, column: str, matches: int) -> None:
        self.column = column
        self.matches = matches
        if matches == 0:
            msg = f"Column '{column}' not found in data"
        else:
            msg = f"Column '{column}' is ambiguous: {matches} columns share that name"
        super().__init__(msg)


class TabulationWarning(UserWarning):
    """Base class for non-fatal tabulation anomalies."""


class TypeCoercionWarning(TabulationWarning):
    """A numeric counter was converted to a categorical before counting."""


class RemovedMissingWarning(TabulationWarning):
    """Rows with a missing counter value were dropped."""
