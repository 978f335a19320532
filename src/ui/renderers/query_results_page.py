"""Query results page orchestration.

QueryResultsPageRenderer loads the selected query through the query client,
feeds the payload into the view store and delegates the chart, table and
column-settings cards to the query_results operations modules.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import streamlit as st

from api.error_handling import QueryFetchError
from api.query_client import QueryResultClient
from ui.charts.figures import ResultChartBuilder
from ui.renderers.query_results import chart_ops, column_settings_ops, table_ops
from ui.state.session_manager import SessionStateManager


def _streamlit_error_handler(message: str, level: str) -> None:
    if level == "warning":
        st.warning(message)
    else:
        st.error(message)


class QueryResultsPageRenderer:
    """Handles loading and rendering of a query's result."""

    def __init__(
        self,
        logger: logging.Logger,
        client: Optional[QueryResultClient] = None,
        chart_builder: Optional[ResultChartBuilder] = None,
    ):
        self.logger = logger
        self.client = client or QueryResultClient(logger_obj=logger)
        self.chart_builder = chart_builder or ResultChartBuilder(
            logger_obj=logger, error_handler=_streamlit_error_handler
        )

    def load_query(self, query_id: int, force: bool = False) -> bool:
        """Select a query and fetch its result unless it is already loaded.

        Returns:
            True when a payload was accepted for the selected query.
        """
        SessionStateManager.select_query(query_id)
        store = SessionStateManager.get_store()
        if store.state.has_payload and not force:
            return True

        SessionStateManager.set_fetch_error(None)
        try:
            with st.spinner(f"Loading query #{query_id}..."):
                result = asyncio.run(self.client.fetch(query_id))
        except QueryFetchError as e:
            self.logger.error(f"Could not load query {query_id}: {e}", exc_info=True)
            SessionStateManager.set_fetch_error(e.user_message())
            return False

        accepted = store.on_payload_received(result.query_id, result.payload, title=result.title)
        if accepted:
            SessionStateManager.set_query_metadata(result.author)
        return accepted

    def render_page(self) -> None:
        """Render the result page for the selected query."""
        store = SessionStateManager.get_store()
        state = store.state

        if state.query_id is None:
            st.info("Enter a query ID in the sidebar to load its result.")
            return

        st.header(state.title or f"Query #{state.query_id}")
        author = SessionStateManager.get_query_author()
        if author:
            st.caption(f"Author: {author}")

        fetch_error = SessionStateManager.get_fetch_error()
        if fetch_error:
            st.error(fetch_error)

        # A failed refresh keeps showing the result loaded before it
        if not state.has_payload:
            if not fetch_error:
                st.info("Loading data...")
            return

        if not state.is_tabular:
            st.warning("This result is not tabular; showing the raw response instead.")
            st.json(state.raw_payload)
            return

        chart_ops.render_chart_card(self)
        st.divider()
        column_settings_ops.render_column_settings(self)
        table_ops.render_data_table(self)
