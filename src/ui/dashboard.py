"""Streamlit entry point for the query result dashboard.

Run with: streamlit run src/ui/dashboard.py
"""

from __future__ import annotations

# Standard Library Imports
import sys
from pathlib import Path

# Third-Party Imports
import streamlit as st

# Add the 'src' directory to sys.path
_CURRENT_FILE_DIR = Path(__file__).resolve().parent
_SRC_DIR = _CURRENT_FILE_DIR.parent

if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

# Local Application Imports
from utils.logger_setup import setup_logging
from ui.renderers.query_results_page import QueryResultsPageRenderer
from ui.state.session_manager import SessionStateManager

ui_logger = setup_logging("baroboard.ui.dashboard", console_output=True)
ui_logger.info("--- dashboard.py script started ---")

st.set_page_config(
    page_title="Baroboard – Query Results",
    layout="wide",
    initial_sidebar_state="expanded",
)

SessionStateManager.initialize_all_session_state()

page_renderer = QueryResultsPageRenderer(ui_logger)

with st.sidebar:
    st.header("🔎 Query")
    query_id = st.number_input("Query ID", min_value=1, step=1, value=None, key="query_id_input")
    col_load, col_refresh = st.columns(2)
    load_clicked = col_load.button("Load", key="btn_load_query", type="primary", use_container_width=True)
    refresh_clicked = col_refresh.button("Refresh", key="btn_refresh_query", use_container_width=True)

if query_id is not None and (load_clicked or refresh_clicked):
    page_renderer.load_query(int(query_id), force=refresh_clicked)

page_renderer.render_page()
