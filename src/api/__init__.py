"""API clients and communication modules."""

from .error_handling import ErrorCategory, QueryFetchError, categorize_error
from .query_client import QueryFetchResult, QueryMetadata, QueryResultClient

__all__ = [
    "QueryResultClient",
    "QueryFetchResult",
    "QueryMetadata",
    "QueryFetchError",
    "ErrorCategory",
    "categorize_error",
]
