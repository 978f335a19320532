"""Query results page rendering package.

- table_ops: paginated data table with axis-selecting headers
- chart_ops: chart card with the large-dataset render gate
- column_settings_ops: show/hide columns panel
"""

from . import chart_ops, column_settings_ops, table_ops

__all__ = ["chart_ops", "column_settings_ops", "table_ops"]
