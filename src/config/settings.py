"""Application-wide settings and configuration."""

import logging
import os
from pathlib import Path
from typing import Optional


class Settings:
    """Centralized application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    LOGS_DIR = PROJECT_ROOT / "logs"

    # Logging
    LOG_LEVEL_ENV_VAR = "BAROBOARD_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "INFO"

    # Type inference
    TYPE_SAMPLE_SIZE = 10

    # Chart derivation
    PIE_MAX_CATEGORIES = 7
    DEFAULT_CHART_TITLE = "Chart"
    LARGE_DATASET_ROW_THRESHOLD = 1000
    MAX_CHART_POINTS = 5000

    # Table display
    ITEMS_PER_PAGE = 50
    MAX_VISIBLE_PAGES = 5
    EMPTY_CELL_PLACEHOLDER = "-"

    @classmethod
    def get_log_level(cls, override: Optional[str] = None) -> int:
        """Resolve the log level from an explicit override or the environment."""
        level_name = (override or os.environ.get(cls.LOG_LEVEL_ENV_VAR) or cls.DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(level_name)
        return level if isinstance(level, int) else logging.INFO
