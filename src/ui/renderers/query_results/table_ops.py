"""Data table rendering: axis-selecting headers, hide menu, rows and pager."""

from __future__ import annotations

from typing import Any, List, Optional

import pandas as pd
import streamlit as st

from config.settings import Settings
from data.table import ColumnRef, ColumnType, Row
from ui.state.pagination import PageView
from ui.state.selection_state import SelectionState
from ui.state.session_manager import SessionStateManager


def header_label(name: str, selection: SelectionState) -> str:
    """Header button text with an axis badge for selected columns."""
    if selection.is_x(name):
        return f"{name} · X axis"
    if selection.is_y(name):
        return f"{name} · Y axis"
    return name


def header_help(name: str, selection: SelectionState, column_type: Optional[ColumnType]) -> str:
    parts = ["Click: set X axis"]
    if column_type == ColumnType.NUMBER:
        parts.append("Y-axis mode + click: set Y axis")
    if selection.is_x(name):
        parts.append("(X axis selected)")
    elif selection.is_y(name):
        parts.append("(Y axis selected)")
    return " • ".join(parts)


def page_rows_to_frame(rows: List[Row], columns: List[ColumnRef], start_index: int = 0) -> pd.DataFrame:
    """Display frame for one page: visible columns only, 1-based global row numbers."""
    names = [column.name for column in columns]
    records = [
        {
            name: Settings.EMPTY_CELL_PLACEHOLDER if row.get(name) is None else str(row.get(name))
            for name in names
        }
        for row in rows
    ]
    frame = pd.DataFrame.from_records(records, columns=names)
    frame.index = pd.RangeIndex(start_index + 1, start_index + 1 + len(rows), name="#")
    return frame


def on_header_click(name: str) -> None:
    store = SessionStateManager.get_store()
    store.on_column_click(name, modified=SessionStateManager.get_y_axis_mode())


def on_hide_column(name: str) -> None:
    SessionStateManager.get_store().on_column_hide(name)


def on_page_change(page: int) -> None:
    SessionStateManager.get_store().on_page_change(page)


def render_data_table(renderer: Any) -> None:
    """Render the data table card for the current query."""
    store = SessionStateManager.get_store()
    state = store.state
    table = state.table

    st.subheader("📋 Data Table")
    if table is None or table.is_empty:
        st.info("No data to display.")
        return

    visible = state.visible_columns()
    if not visible:
        st.info("All columns are hidden.")
        st.button(
            "Column settings",
            key="btn_column_settings_empty",
            on_click=SessionStateManager.set_show_column_settings,
            args=(True,),
        )
        return

    page = store.page_view()
    render_table_toolbar(renderer, page, state.visibility.hidden_count)
    render_column_headers(renderer, visible, state.selection, store.column_types)
    st.dataframe(
        page_rows_to_frame(page.rows, visible, page.start_index),
        use_container_width=True,
        height=400,
    )
    render_pagination_controls(renderer, page)


def render_table_toolbar(renderer: Any, page: PageView, hidden_count: int) -> None:
    col_info, col_mode, col_settings = st.columns([3, 1, 1])

    with col_info:
        first, last = page.showing_range
        text = f"Showing rows {first:,}-{last:,} of {page.row_count:,}"
        if page.show_pager:
            text += f" (Page {page.current_page} / {page.total_pages})"
        if hidden_count:
            text += f" • {hidden_count} column(s) hidden"
        st.caption(text)

    with col_mode:
        st.toggle(
            "Y-axis mode",
            key="y_axis_mode",
            help="While on, clicking a numeric column header selects it as the Y axis.",
        )

    with col_settings:
        st.button(
            "⚙️ Column settings",
            key="btn_column_settings",
            on_click=SessionStateManager.set_show_column_settings,
            args=(True,),
            use_container_width=True,
        )


def render_column_headers(
    renderer: Any,
    visible: List[ColumnRef],
    selection: SelectionState,
    column_types: dict,
) -> None:
    header_cols = st.columns(len(visible))
    for col, column in zip(header_cols, visible):
        name = column.name
        with col:
            st.button(
                header_label(name, selection),
                key=f"col_header_{name}",
                help=header_help(name, selection, column_types.get(name)),
                on_click=on_header_click,
                args=(name,),
                type="primary" if selection.is_x(name) or selection.is_y(name) else "secondary",
                use_container_width=True,
            )
            with st.popover("⋯", use_container_width=True):
                st.caption(f"Column: {name}")
                st.button(
                    "Hide column",
                    key=f"col_hide_{name}",
                    on_click=on_hide_column,
                    args=(name,),
                )


def render_pagination_controls(renderer: Any, page: PageView) -> None:
    if not page.show_pager:
        return

    buttons = st.columns(len(page.page_numbers) + 2)
    with buttons[0]:
        st.button(
            "← Previous",
            key="prev_page_btn",
            disabled=not page.has_previous,
            on_click=on_page_change,
            args=(page.current_page - 1,),
        )
    for col, number in zip(buttons[1:-1], page.page_numbers):
        with col:
            st.button(
                str(number),
                key=f"page_btn_{number}",
                type="primary" if number == page.current_page else "secondary",
                on_click=on_page_change,
                args=(number,),
            )
    with buttons[-1]:
        st.button(
            "Next →",
            key="next_page_btn",
            disabled=not page.has_next,
            on_click=on_page_change,
            args=(page.current_page + 1,),
        )
