"""Derive a chart configuration from a result table.

The y axis is always a number column. The x axis and the chart kind come from
the user's x selection when it names a column of the table, otherwise from the
first date column (line), the first string column (pie or bar depending on
how many categories it has) or the first column (bar).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional

from config.settings import Settings
from data.table import ColumnType, Row, Table
from data.type_inference import partition_columns
from ui.state.selection_state import SelectionState

logger = logging.getLogger(__name__)


class ChartKind(str, Enum):
    """Chart kinds the renderer knows how to draw."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"


@dataclass(frozen=True)
class ChartConfig:
    """Chart kind plus axis bindings, ready for the chart renderer."""

    kind: ChartKind
    x_key: str
    y_key: str
    data: List[Row]
    title: str = Settings.DEFAULT_CHART_TITLE

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "xKey": self.x_key,
            "yKey": self.y_key,
            "title": self.title,
            "data": self.data,
        }


_MISSING = object()


def _distinct_key(value: Any) -> Any:
    # Missing keys and explicit nulls are the same "no value" category
    if value is None or value is _MISSING:
        return None
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


def distinct_count(rows: List[Row], key: str) -> int:
    """Number of distinct values of a column over all rows."""
    return len({_distinct_key(row.get(key, _MISSING)) for row in rows})


def kind_for_x_column(rows: List[Row], x_key: str, x_type: Optional[ColumnType]) -> ChartKind:
    """Pick the chart kind implied by the x axis column's type."""
    if x_type == ColumnType.DATE:
        return ChartKind.LINE
    if x_type == ColumnType.STRING:
        if distinct_count(rows, x_key) <= Settings.PIE_MAX_CATEGORIES:
            return ChartKind.PIE
        return ChartKind.BAR
    return ChartKind.BAR


def derive_chart_config(
    table: Table,
    types: Mapping[str, ColumnType],
    selection: Optional[SelectionState] = None,
    title: Optional[str] = None,
) -> Optional[ChartConfig]:
    """Derive the chart for a table and the current axis selection.

    Args:
        table: Table to chart. Callers pass the visible columns only.
        types: Inferred column types for the table.
        selection: The user's axis choices; defaults apply where unset.
        title: Optional chart title.

    Returns:
        The ChartConfig, or None when the table has no number column to plot.
    """
    selection = selection or SelectionState.initial()
    groups = partition_columns(table, dict(types))

    if not groups.number:
        logger.debug("No number column available, chart cannot be derived")
        return None

    if selection.y_key is not None and selection.y_key in groups.number:
        y_key = selection.y_key
    else:
        y_key = groups.number[0]

    if table.has_column(selection.x_key):
        x_key = selection.x_key
    elif groups.date:
        x_key = groups.date[0]
    elif groups.string:
        x_key = groups.string[0]
    else:
        x_key = table.columns[0].name

    kind = kind_for_x_column(table.rows, x_key, types.get(x_key))
    return ChartConfig(
        kind=kind,
        x_key=x_key,
        y_key=y_key,
        data=table.rows,
        title=title or Settings.DEFAULT_CHART_TITLE,
    )
