"""Typed contracts for tabular query results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

Scalar = Union[str, int, float, None]
Row = Dict[str, Scalar]


class ColumnType(str, Enum):
    """Semantic type inferred for a column."""

    NUMBER = "number"
    STRING = "string"
    DATE = "date"


@dataclass(frozen=True)
class ColumnRef:
    """A column of a result table.

    Only ``name`` takes part in equality. Any other keys the upstream service
    sent for the column (``type``, ``friendly_name``...) are kept in ``metadata``.
    """

    name: str
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.metadata, "name": self.name}


@dataclass(frozen=True, eq=False)
class Table:
    """Normalized column/row structure extracted from a query result.

    Tables compare by identity: a freshly extracted table is a new table even
    when its content equals the previous one. Use ``same_content`` for a
    structural comparison.
    """

    columns: Tuple[ColumnRef, ...]
    rows: List[Row]

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.columns or not self.rows

    def has_column(self, name: Optional[str]) -> bool:
        return name is not None and any(column.name == name for column in self.columns)

    def column_values(self, name: str, limit: Optional[int] = None) -> List[Scalar]:
        """Values of one column in row order; missing keys come back as None."""
        rows = self.rows if limit is None else self.rows[:limit]
        return [row.get(name) for row in rows]

    def restrict_columns(self, names: Iterable[str]) -> "Table":
        """A table exposing only the given columns, in table order, over the same rows."""
        keep = set(names)
        return Table(columns=tuple(c for c in self.columns if c.name in keep), rows=self.rows)

    def same_content(self, other: "Table") -> bool:
        return self.columns == other.columns and self.rows == other.rows

    def to_dict(self) -> Dict[str, Any]:
        return {"columns": [column.to_dict() for column in self.columns], "rows": self.rows}
