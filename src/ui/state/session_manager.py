"""
Centralized session state management for the Streamlit dashboard.

Streamlit reruns the page script on every interaction, so everything that
must survive a rerun lives in st.session_state. This module owns the keys
and gives the rest of the UI type-safe accessors.
"""

from typing import Any, Callable, Dict, Optional, Union

import streamlit as st

from .query_view_state import QueryViewStore

STORE_KEY = "query_view_store"


def initialize_state_keys(key_defaults: Dict[str, Any]) -> None:
    """Initialize missing session-state keys with configured defaults."""
    for key, default_value in key_defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default_value() if callable(default_value) else default_value


def reset_state_group(key_defaults: Dict[str, Any]) -> None:
    """Reset a session-state group to its configured defaults."""
    for key, default_value in key_defaults.items():
        st.session_state[key] = default_value() if callable(default_value) else default_value


class SessionStateManager:
    """Manages Streamlit session state with type-safe accessors."""

    QUERY_KEYS: Dict[str, Union[None, str, bool, Callable]] = {
        "selected_query_id": None,
        "query_author": None,
        "fetch_error": None,
    }

    TABLE_UI_KEYS: Dict[str, Union[bool, None]] = {
        "y_axis_mode": False,
        "show_column_settings": False,
    }

    @classmethod
    def initialize_all_session_state(cls) -> None:
        """Initialize all session state variables with their default values."""
        initialize_state_keys({**cls.QUERY_KEYS, **cls.TABLE_UI_KEYS, STORE_KEY: QueryViewStore})

    # Type-safe getters
    @classmethod
    def get_store(cls) -> QueryViewStore:
        """Get the view store of the selected query, creating it on first use."""
        if STORE_KEY not in st.session_state:
            st.session_state[STORE_KEY] = QueryViewStore()
        return st.session_state[STORE_KEY]

    @classmethod
    def get_selected_query_id(cls) -> Optional[int]:
        return st.session_state.get("selected_query_id")

    @classmethod
    def get_query_author(cls) -> Optional[str]:
        return st.session_state.get("query_author")

    @classmethod
    def get_fetch_error(cls) -> Optional[str]:
        return st.session_state.get("fetch_error")

    @classmethod
    def get_y_axis_mode(cls) -> bool:
        """Whether header clicks currently pick the y axis (modified click)."""
        return bool(st.session_state.get("y_axis_mode", False))

    @classmethod
    def get_show_column_settings(cls) -> bool:
        return bool(st.session_state.get("show_column_settings", False))

    # Type-safe setters
    @classmethod
    def select_query(cls, query_id: int) -> bool:
        """Record a query selection; returns True when the view state was reset."""
        reset = cls.get_store().on_new_query_selected(query_id)
        if reset:
            reset_state_group(cls.QUERY_KEYS)
            st.session_state.selected_query_id = query_id
        return reset

    @classmethod
    def set_query_metadata(cls, author: Optional[str]) -> None:
        st.session_state.query_author = author

    @classmethod
    def set_fetch_error(cls, message: Optional[str]) -> None:
        st.session_state.fetch_error = message

    @classmethod
    def set_show_column_settings(cls, visible: bool) -> None:
        st.session_state.show_column_settings = visible
