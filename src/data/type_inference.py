"""Column type inference for result tables.

Each column is classified from a sample of its first ``TYPE_SAMPLE_SIZE``
rows (in row order). Empty values are ignored; an empty sample is a string
column. Otherwise the priority is number, then date, then string.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from config.settings import Settings

from .table import ColumnType, Table

CLOCK_KEYWORDS = frozenset({"now", "today"})


@dataclass(frozen=True)
class ColumnGroups:
    """Column names partitioned by inferred type, in table order."""

    number: List[str] = field(default_factory=list)
    string: List[str] = field(default_factory=list)
    date: List[str] = field(default_factory=list)


def to_finite_number(value: Any) -> Optional[float]:
    """Convert a scalar to a finite float, or None when it is not numeric.

    Numbers and decimal strings qualify. NaN, infinities, booleans, blank
    strings and anything else do not.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts digit separators, JSON producers never emit them
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_date_string(value: Any) -> bool:
    """True when value is a string a generic date parser accepts."""
    if not isinstance(value, str) or not value.strip():
        return False
    # pandas resolves these to the current time
    if value.strip().lower() in CLOCK_KEYWORDS:
        return False
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(value, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return False
    return not pd.isna(parsed)


def infer_column_type(values: List[Any]) -> ColumnType:
    """Classify one column from its sampled values."""
    sample = [value for value in values if value is not None]
    if not sample:
        return ColumnType.STRING
    if all(to_finite_number(value) is not None for value in sample):
        return ColumnType.NUMBER
    if all(is_date_string(value) for value in sample):
        return ColumnType.DATE
    return ColumnType.STRING


def infer_column_types(table: Table, sample_size: Optional[int] = None) -> Dict[str, ColumnType]:
    """Infer a ColumnType for every column of the table.

    Args:
        table: The table to classify.
        sample_size: Number of leading rows to inspect. Defaults to Settings.TYPE_SAMPLE_SIZE.

    Returns:
        Mapping of column name to ColumnType, ordered like ``table.columns``.
    """
    if sample_size is None:
        sample_size = Settings.TYPE_SAMPLE_SIZE
    limit = max(0, min(sample_size, table.row_count))
    return {
        column.name: infer_column_type(table.column_values(column.name, limit=limit))
        for column in table.columns
    }


def partition_columns(table: Table, types: Dict[str, ColumnType]) -> ColumnGroups:
    groups = ColumnGroups()
    buckets = {
        ColumnType.NUMBER: groups.number,
        ColumnType.STRING: groups.string,
        ColumnType.DATE: groups.date,
    }
    for name in table.column_names:
        column_type = types.get(name)
        if column_type in buckets:
            buckets[column_type].append(name)
    return groups
