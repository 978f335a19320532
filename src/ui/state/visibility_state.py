"""Hidden-column bookkeeping for the result table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List

from data.table import ColumnRef, Table


@dataclass(frozen=True)
class ColumnVisibilityState:
    """Set of column names hidden from the table and the chart.

    Hiding a column must also clear it from the axis selection; the per-query
    bundle (QueryViewState) applies both updates together.
    """

    hidden: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def initial(cls) -> "ColumnVisibilityState":
        return cls()

    def hide(self, name: str) -> "ColumnVisibilityState":
        if name in self.hidden:
            return self
        return ColumnVisibilityState(hidden=self.hidden | {name})

    def show(self, name: str) -> "ColumnVisibilityState":
        if name not in self.hidden:
            return self
        return ColumnVisibilityState(hidden=self.hidden - {name})

    def toggle(self, name: str) -> "ColumnVisibilityState":
        return self.show(name) if name in self.hidden else self.hide(name)

    def is_hidden(self, name: str) -> bool:
        return name in self.hidden

    @property
    def hidden_count(self) -> int:
        return len(self.hidden)

    def visible_columns(self, table: Table) -> List[ColumnRef]:
        return [column for column in table.columns if column.name not in self.hidden]

    def hidden_columns(self, table: Table) -> List[ColumnRef]:
        """Hidden columns in table order (names not in the table are skipped)."""
        return [column for column in table.columns if column.name in self.hidden]

    def visible_table(self, table: Table) -> Table:
        return table.restrict_columns(column.name for column in self.visible_columns(table))
