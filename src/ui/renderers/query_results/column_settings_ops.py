"""Column settings panel: show or hide individual columns."""

from __future__ import annotations

from typing import Any

import streamlit as st

from ui.state.session_manager import SessionStateManager


def on_toggle_column(name: str) -> None:
    SessionStateManager.get_store().on_column_visibility_toggle(name)


def render_column_settings(renderer: Any) -> None:
    """Render the column settings panel when it is open."""
    if not SessionStateManager.get_show_column_settings():
        return

    state = SessionStateManager.get_store().state
    if state.table is None:
        return

    visible = state.visible_columns()
    hidden = state.visibility.hidden_columns(state.table)

    with st.expander("⚙️ Column settings", expanded=True):
        st.markdown(f"**Visible columns ({len(visible)})**")
        if not visible:
            st.caption("All columns are hidden.")
        for column in visible:
            col_name, col_action = st.columns([4, 1])
            col_name.write(column.name)
            col_action.button(
                "Hide",
                key=f"settings_hide_{column.name}",
                on_click=on_toggle_column,
                args=(column.name,),
            )

        if hidden:
            st.markdown(f"**Hidden columns ({len(hidden)})**")
            for column in hidden:
                col_name, col_action = st.columns([4, 1])
                col_name.write(column.name)
                col_action.button(
                    "Show",
                    key=f"settings_show_{column.name}",
                    on_click=on_toggle_column,
                    args=(column.name,),
                )

        st.button(
            "Close",
            key="btn_close_column_settings",
            on_click=SessionStateManager.set_show_column_settings,
            args=(False,),
        )
