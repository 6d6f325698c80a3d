"""epitab core module."""

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

__all__ = [
    "CodeSnippet",
    "ColumnKind",
    "ColumnType",
    "Levels",
    "classify_column",
    "numeric_to_factor",
    "TabulationConfig",
    "load_config",
    "ColumnNotFoundError",
    "TabulationWarning",
    "TypeCoercionWarning",
    "RemovedMissingWarning",
]
