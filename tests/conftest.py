# tests/conftest.py
import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Make sure `src/` is on the import path:
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
sys.path.insert(0, os.path.join(ROOT, "src"))

from data.table_extractor import extract_table  # noqa: E402


def make_payload(columns, rows):
    """Wrap columns/rows in the query service response envelope."""
    return {
        "query_result": {
            "data": {
                "columns": [{"name": name} for name in columns],
                "rows": rows,
            }
        }
    }


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def sales_payload():
    """Date, category and numeric columns; 12 rows, 3 categories."""
    regions = ["North", "South", "East"]
    rows = [
        {
            "day": f"2024-01-{i:02d}",
            "region": regions[i % 3],
            "revenue": 100 + i * 10,
            "units": str(i),
        }
        for i in range(1, 13)
    ]
    return make_payload(["day", "region", "revenue", "units"], rows)


@pytest.fixture
def sales_table(sales_payload):
    return extract_table(sales_payload)


@pytest.fixture
def text_only_table():
    rows = [{"name": f"user{i}", "email": f"user{i}@example.com"} for i in range(5)]
    return extract_table(make_payload(["name", "email"], rows))


@pytest.fixture
def large_table():
    rows = [{"category": f"c{i % 20}", "value": i} for i in range(237)]
    return extract_table(make_payload(["category", "value"], rows))


@pytest.fixture
def mock_aiohttp_session():
    """Provide a mock aiohttp session whose get() yields a mock response."""
    session = MagicMock()
    response = AsyncMock()
    response.json = AsyncMock()
    response.raise_for_status = MagicMock()
    response.status = 200

    # Make the session.get return an async context manager
    session.get.return_value.__aenter__.return_value = response
    session.get.return_value.__aexit__.return_value = None

    return session, response


@pytest.fixture
def mock_logger():
    """Provide a mock logger with assertion helpers."""
    logger = MagicMock()

    # Track all log calls
    logger._calls = {
        "debug": [],
        "info": [],
        "warning": [],
        "error": [],
        "critical": [],
    }

    def make_log_method(level):
        def log_method(msg, *args, **kwargs):
            logger._calls[level].append(str(msg))

        return log_method

    logger.debug = make_log_method("debug")
    logger.info = make_log_method("info")
    logger.warning = make_log_method("warning")
    logger.error = make_log_method("error")
    logger.critical = make_log_method("critical")

    def assert_logged(level, substring):
        messages = logger._calls.get(level, [])
        assert any(substring in msg for msg in messages), (
            f"'{substring}' not found in {level} logs: {messages}"
        )

    logger.assert_logged = assert_logged

    return logger
