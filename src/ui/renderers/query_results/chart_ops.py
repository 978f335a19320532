"""Chart card rendering."""

from __future__ import annotations

from typing import Any

import streamlit as st

from config.charts import ChartStyle
from ui.state.session_manager import SessionStateManager


def on_render_chart_click() -> None:
    SessionStateManager.get_store().on_chart_render_requested()


def render_chart_card(renderer: Any) -> None:
    """Render the chart for the current query, or the matching placeholder."""
    store = SessionStateManager.get_store()

    st.subheader("📈 Data Chart")
    if not store.state.is_tabular:
        st.info("Chart data is not ready yet. The chart appears once the data is loaded.")
        return

    config = store.chart_config()
    if config is None:
        st.info("No chart available: the result has no visible numeric column to plot.")
        return

    if not store.should_render_chart:
        st.warning(
            f"Large dataset ({store.state.row_count:,} rows). Rendering the chart may take a while."
        )
        st.button("📊 Render chart", key="btn_render_chart", type="primary", on_click=on_render_chart_click)
        return

    if store.is_large_dataset:
        st.warning("Large dataset: chart rendering may take a while.")

    fig = renderer.chart_builder.build(config)
    if fig is None:
        st.info("No chart available for this result.")
        return

    st.caption(
        f"{ChartStyle.get_kind_label(config.kind.value)} • X: {config.x_key} • Y: {config.y_key}"
    )
    st.plotly_chart(fig, use_container_width=True)
