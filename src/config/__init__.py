"""Configuration management for the Baroboard query result explorer."""

from .api import APIConfig
from .charts import ChartStyle
from .settings import Settings

__all__ = ["Settings", "ChartStyle", "APIConfig"]
