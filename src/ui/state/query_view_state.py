"""Per-query view state and the events that drive it.

Everything the result page shows for one query (the extracted table, axis
selection, hidden columns, current page and the large-dataset chart gate) is
one QueryViewState. It is replaced wholesale when a different query is
selected, so the sibling states can never belong to different tables.

QueryViewStore holds the state for the currently selected query, applies UI
events to it, discards payloads that arrive for a query that is no longer
selected and memoizes column types per table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, List, Mapping, Optional, Tuple

from config.settings import Settings
from data.table import ColumnRef, ColumnType, Table
from data.table_extractor import extract_table
from data.type_inference import infer_column_types
from ui.charts.derivation import ChartConfig, derive_chart_config

from .pagination import PageView, PaginationState, page_view
from .selection_state import SelectionState
from .visibility_state import ColumnVisibilityState


@dataclass(frozen=True)
class QueryViewState:
    """State bundle keyed to one query identity."""

    query_id: Optional[Hashable] = None
    table: Optional[Table] = None
    raw_payload: Any = None
    has_payload: bool = False
    title: Optional[str] = None
    selection: SelectionState = field(default_factory=SelectionState.initial)
    visibility: ColumnVisibilityState = field(default_factory=ColumnVisibilityState.initial)
    pagination: PaginationState = field(default_factory=PaginationState.initial)
    chart_render_requested: bool = False

    @classmethod
    def for_query(cls, query_id: Optional[Hashable], items_per_page: int = Settings.ITEMS_PER_PAGE) -> "QueryViewState":
        return cls(query_id=query_id, pagination=PaginationState.initial(items_per_page))

    @property
    def is_tabular(self) -> bool:
        return self.table is not None

    @property
    def row_count(self) -> int:
        return self.table.row_count if self.table is not None else 0

    def reset_for_new_table(self, table: Optional[Table]) -> "QueryViewState":
        """Swap in a table, resetting every table-dependent sibling together."""
        return replace(
            self,
            table=table,
            selection=self.selection.load_new_table(),
            visibility=ColumnVisibilityState.initial(),
            pagination=PaginationState.initial(self.pagination.items_per_page),
            chart_render_requested=False,
        )

    def with_payload(self, payload: Any, title: Optional[str] = None) -> "QueryViewState":
        table = extract_table(payload)
        updated = replace(self, raw_payload=payload, has_payload=True, title=title or self.title)
        if table is not None and self.table is not None and table.same_content(self.table):
            # Same result delivered again: keep the table identity and the view state
            return updated
        return updated.reset_for_new_table(table)

    def visible_columns(self) -> List[ColumnRef]:
        if self.table is None:
            return []
        return self.visibility.visible_columns(self.table)

    def is_visible_column(self, name: str) -> bool:
        return any(column.name == name for column in self.visible_columns())

    def click_column(self, name: str, modified: bool, types: Mapping[str, ColumnType]) -> "QueryViewState":
        # Hidden or unknown columns have no header to click
        if not self.is_visible_column(name):
            return self
        return replace(self, selection=self.selection.click_column(name, modified=modified, types=types))

    def hide_column(self, name: str) -> "QueryViewState":
        return replace(
            self,
            visibility=self.visibility.hide(name),
            selection=self.selection.hide_column(name),
        )

    def toggle_column_visibility(self, name: str) -> "QueryViewState":
        visibility = self.visibility.toggle(name)
        selection = self.selection.hide_column(name) if visibility.is_hidden(name) else self.selection
        return replace(self, visibility=visibility, selection=selection)

    def change_page(self, page: int) -> "QueryViewState":
        return replace(self, pagination=self.pagination.set_page(page, self.row_count))

    def request_chart_render(self) -> "QueryViewState":
        return replace(self, chart_render_requested=True)


class QueryViewStore:
    """Holds the view state of the selected query and applies UI events to it."""

    def __init__(
        self,
        logger_obj: Optional[logging.Logger] = None,
        items_per_page: int = Settings.ITEMS_PER_PAGE,
        large_dataset_threshold: int = Settings.LARGE_DATASET_ROW_THRESHOLD,
    ):
        self.logger = logger_obj or logging.getLogger(__name__)
        self.items_per_page = items_per_page
        self.large_dataset_threshold = large_dataset_threshold
        self._state = QueryViewState.for_query(None, items_per_page)
        self._types_cache: Optional[Tuple[Table, Dict[str, ColumnType]]] = None

    @property
    def state(self) -> QueryViewState:
        return self._state

    @property
    def query_id(self) -> Optional[Hashable]:
        return self._state.query_id

    # ---- data events ----

    def on_new_query_selected(self, query_id: Hashable) -> bool:
        """Select a query. Returns True when the view state was reset."""
        if query_id == self._state.query_id:
            self.logger.debug(f"Query {query_id} re-selected, keeping view state")
            return False
        self.logger.info(f"Query selection changed: {self._state.query_id} -> {query_id}")
        self._state = QueryViewState.for_query(query_id, self.items_per_page)
        return True

    def on_payload_received(self, query_id: Hashable, payload: Any, title: Optional[str] = None) -> bool:
        """Deliver a fetched payload. Returns False when it was discarded as stale."""
        if query_id != self._state.query_id:
            self.logger.warning(
                f"Discarding stale payload for query {query_id}; current query is {self._state.query_id}"
            )
            return False
        previous_table = self._state.table
        self._state = self._state.with_payload(payload, title=title)
        table = self._state.table
        if table is None:
            self.logger.info(f"Payload for query {query_id} is not tabular")
        elif table is not previous_table:
            self.logger.info(
                f"Loaded table for query {query_id}: {len(table.columns)} columns, {table.row_count:,} rows"
            )
        return True

    # ---- UI events ----

    def on_column_click(self, name: str, modified: bool = False) -> None:
        self._state = self._state.click_column(name, modified, self.column_types)

    def on_column_hide(self, name: str) -> None:
        self._state = self._state.hide_column(name)

    def on_column_visibility_toggle(self, name: str) -> None:
        self._state = self._state.toggle_column_visibility(name)

    def on_page_change(self, page: int) -> None:
        self._state = self._state.change_page(page)

    def on_chart_render_requested(self) -> None:
        self._state = self._state.request_chart_render()

    # ---- derived views ----

    @property
    def column_types(self) -> Dict[str, ColumnType]:
        table = self._state.table
        if table is None:
            return {}
        if self._types_cache is None or self._types_cache[0] is not table:
            self._types_cache = (table, infer_column_types(table))
        return self._types_cache[1]

    @property
    def is_large_dataset(self) -> bool:
        return self._state.row_count >= self.large_dataset_threshold

    @property
    def should_render_chart(self) -> bool:
        return self._state.is_tabular and (self._state.chart_render_requested or not self.is_large_dataset)

    def chart_config(self) -> Optional[ChartConfig]:
        """Chart for the visible columns of the current table, or None."""
        table = self._state.table
        if table is None:
            return None
        visible = self._state.visibility.visible_table(table)
        return derive_chart_config(visible, self.column_types, self._state.selection, title=self._state.title)

    def page_view(self) -> Optional[PageView]:
        if self._state.table is None:
            return None
        return page_view(self._state.table, self._state.pagination)
