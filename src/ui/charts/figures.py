"""Plotly figures for derived chart configurations.

ResultChartBuilder turns a ChartConfig into a Plotly figure. It owns the
presentation concerns derivation leaves out: down-sampling very long series,
coercing the value column to numbers and applying the house style.
"""

import logging
from functools import wraps
from typing import Callable, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from config.charts import ChartStyle
from config.settings import Settings
from data.table import Row

from .derivation import ChartConfig, ChartKind


def chart_error_handler(chart_name: str):
    """Decorator for standardized figure-building error handling.

    Failures are logged and reported through the builder's show_error(), and
    the wrapped method returns None so the page falls back to the placeholder.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except Exception as e:
                self.logger.error(f"Error generating {chart_name}: {e}", exc_info=True)
                self.show_error(f"Could not generate {chart_name}: {e}")
                return None
        return wrapper
    return decorator


def downsample_rows(rows: List[Row], max_points: int) -> List[Row]:
    """Evenly thin a row list down to at most max_points rows, keeping the last row."""
    if max_points <= 0 or len(rows) <= max_points:
        return rows
    step = len(rows) / max_points
    picked = [rows[int(i * step)] for i in range(max_points - 1)]
    picked.append(rows[-1])
    return picked


def config_to_frame(config: ChartConfig, rows: Optional[List[Row]] = None) -> pd.DataFrame:
    """Two-column frame (x, y) for a chart config; y is coerced to numbers."""
    rows = config.data if rows is None else rows
    frame = pd.DataFrame({config.x_key: [row.get(config.x_key) for row in rows]})
    frame[config.y_key] = pd.to_numeric(
        pd.Series([row.get(config.y_key) for row in rows], dtype=object),
        errors="coerce",
    )
    return frame


class ResultChartBuilder:
    """Builds Plotly figures for query result charts.

    The error_handler parameter allows decoupling from Streamlit for testing.
    Signature: (message: str, level: str) -> None. Without one, errors are
    only logged.
    """

    def __init__(
        self,
        logger_obj: Optional[logging.Logger] = None,
        max_points: Optional[int] = None,
        error_handler: Optional[Callable[[str, str], None]] = None,
    ):
        self.logger = logger_obj or logging.getLogger(__name__)
        self.max_points = max_points if max_points is not None else Settings.MAX_CHART_POINTS
        self.style = ChartStyle()
        self._error_handler = error_handler

    def show_error(self, message: str, level: str = "error") -> None:
        if self._error_handler:
            self._error_handler(message, level)

    @chart_error_handler("result chart")
    def build(self, config: ChartConfig) -> Optional[go.Figure]:
        """Build the figure for a chart config."""
        rows = downsample_rows(config.data, self.max_points)
        if len(rows) < len(config.data):
            self.logger.info(
                f"Down-sampled chart series from {len(config.data):,} to {len(rows):,} points"
            )
        frame = config_to_frame(config, rows)

        if config.kind == ChartKind.PIE:
            fig = self._build_pie(frame, config)
        elif config.kind == ChartKind.LINE:
            fig = px.line(
                frame,
                x=config.x_key,
                y=config.y_key,
                title=config.title,
                color_discrete_sequence=self.style.CHART_COLORS,
            )
            fig.update_traces(line_width=self.style.DEFAULT_CONFIG["line_width"])
        else:
            fig = px.bar(
                frame,
                x=config.x_key,
                y=config.y_key,
                title=config.title,
                color_discrete_sequence=self.style.CHART_COLORS,
            )

        return self._apply_layout(fig, config)

    def _build_pie(self, frame: pd.DataFrame, config: ChartConfig) -> go.Figure:
        names = frame[config.x_key].map(
            lambda value: Settings.EMPTY_CELL_PLACEHOLDER if pd.isna(value) else str(value)
        )
        pie_frame = pd.DataFrame({config.x_key: names, config.y_key: frame[config.y_key]})
        categories = list(dict.fromkeys(pie_frame[config.x_key]))
        fig = px.pie(
            pie_frame,
            names=config.x_key,
            values=config.y_key,
            title=config.title,
            color=config.x_key,
            color_discrete_map=self.style.get_color_map(categories),
        )
        fig.update_traces(textposition="inside", textinfo="percent+label")
        return fig

    def _apply_layout(self, fig: go.Figure, config: ChartConfig) -> go.Figure:
        defaults = self.style.DEFAULT_CONFIG
        fig.update_layout(
            title_x=0.5,
            title_font_size=defaults["title_font_size"],
            height=defaults["height"],
            template=defaults["template"],
        )
        if config.kind != ChartKind.PIE:
            fig.update_xaxes(tickangle=defaults["x_tick_angle"])
        return fig
