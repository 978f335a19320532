"""Chart styling and labels."""

from typing import Dict

import plotly.express as px


class ChartStyle:
    """Chart styling and configuration."""

    # Primary series color first; the rest feed pie slices
    CHART_COLORS = [
        "#8884d8",
        "#82ca9d",
        "#ffc658",
        "#ff7300",
        "#00ff7f",
        "#ff6b6b",
        "#4ecdc4",
        "#45b7d1",
        "#96ceb4",
        "#ffeaa7",
    ]

    FALLBACK_COLOR_SEQUENCE = px.colors.qualitative.Plotly

    KIND_LABELS = {
        "bar": "Bar Chart",
        "line": "Line Chart",
        "pie": "Pie Chart",
    }

    # Default styling
    DEFAULT_CONFIG = {
        "height": 550,
        "x_tick_angle": -45,
        "line_width": 2,
        "title_font_size": 18,
        "template": "plotly_white",
    }

    @classmethod
    def get_kind_label(cls, kind: str) -> str:
        """Get the human readable label for a chart kind."""
        return cls.KIND_LABELS.get(kind, kind.title())

    @classmethod
    def get_color_map(cls, categories: list) -> Dict[str, str]:
        """Assign palette colors to categories in order, cycling when exhausted."""
        palette = cls.CHART_COLORS or cls.FALLBACK_COLOR_SEQUENCE
        return {str(category): palette[i % len(palette)] for i, category in enumerate(categories)}
