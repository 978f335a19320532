"""User axis selection for the result chart."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional

from data.table import ColumnType


@dataclass(frozen=True)
class SelectionState:
    """The user's explicit x/y axis choices for one table.

    None means "not chosen". Chart derivation falls back to its own defaults
    at read time without writing them back here, so header highlighting only
    reflects explicit clicks.
    """

    x_key: Optional[str] = None
    y_key: Optional[str] = None

    @classmethod
    def initial(cls) -> "SelectionState":
        return cls()

    def load_new_table(self) -> "SelectionState":
        return SelectionState.initial()

    def click_column(
        self,
        name: str,
        modified: bool = False,
        types: Optional[Mapping[str, ColumnType]] = None,
    ) -> "SelectionState":
        """Apply a header click.

        A plain click toggles the x axis. A modified click toggles the y axis,
        and only for number columns; on any other column it changes nothing.
        """
        if not modified:
            return replace(self, x_key=None if self.x_key == name else name)

        if types is None or types.get(name) != ColumnType.NUMBER:
            return self
        return replace(self, y_key=None if self.y_key == name else name)

    def hide_column(self, name: str) -> "SelectionState":
        """Drop the column from whichever axes reference it."""
        return SelectionState(
            x_key=None if self.x_key == name else self.x_key,
            y_key=None if self.y_key == name else self.y_key,
        )

    def is_x(self, name: str) -> bool:
        return self.x_key is not None and self.x_key == name

    def is_y(self, name: str) -> bool:
        return self.y_key is not None and self.y_key == name
