"""Chart derivation and figure building for query results."""

from .derivation import ChartConfig, ChartKind, derive_chart_config, distinct_count
from .figures import ResultChartBuilder

__all__ = ["ChartConfig", "ChartKind", "derive_chart_config", "distinct_count", "ResultChartBuilder"]
