"""epitab explore module."""

from epitab.explore.descriptive import (
    MISSING_LABEL,
    TOTAL_LABEL,
    DescriptiveResult,
    descriptive,
)
from epitab.explore.format import format_table

__all__ = [
    "descriptive",
    "DescriptiveResult",
    "format_table",
    "MISSING_LABEL",
    "TOTAL_LABEL",
]
