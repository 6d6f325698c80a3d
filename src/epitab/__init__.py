"""epitab — descriptive case tables for line lists.

Counts and proportions of one categorical variable, optionally broken down
by a second one, with explicit handling of missing values and optional
row/column totals.

Quick start::

    from epitab import descriptive, format_table

    result = descriptive(linelist, "sex", grouper="outcome", coltotals=True)
    result.table            # one (n, proportion) column pair per outcome
    format_table(result)    # "12 (40.0%)" style display table
"""

__version__ = "0.1.0"

from epitab.core.binning import numeric_to_factor
from epitab.core.codegen import CodeSnippet
from epitab.core.config import TabulationConfig, load_config
from epitab.core.errors import (
    ColumnNotFoundError,
    RemovedMissingWarning,
    TabulationWarning,
    TypeCoercionWarning,
)
from epitab.core.types import ColumnKind, ColumnType, Levels, classify_column
from epitab.explore.descriptive import DescriptiveResult, descriptive
from epitab.explore.format import format_table

__all__ = [
    # Tabulation
    "descriptive", "DescriptiveResult", "format_table",
    # Core
    "CodeSnippet", "ColumnKind", "ColumnType", "Levels", "classify_column",
    "numeric_to_factor", "TabulationConfig", "load_config",
    # Errors
    "ColumnNotFoundError", "TabulationWarning", "TypeCoercionWarning",
    "RemovedMissingWarning",
]
