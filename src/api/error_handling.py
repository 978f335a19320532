"""Error handling and categorization for query service calls."""

import asyncio
import json
from enum import Enum
from typing import Optional

import aiohttp


class ErrorCategory(Enum):
    """Categories for different types of API errors."""
    NETWORK = "network"
    SERVER = "server"
    CLIENT = "client"
    TIMEOUT = "timeout"
    DATA = "data"
    UNKNOWN = "unknown"


def categorize_error(exception: Exception) -> ErrorCategory:
    """Categorize an exception into error types for better handling."""
    if isinstance(exception, QueryFetchError):
        return exception.category
    if isinstance(exception, asyncio.TimeoutError):
        return ErrorCategory.TIMEOUT
    elif isinstance(exception, aiohttp.ClientConnectorError):
        return ErrorCategory.NETWORK
    elif isinstance(exception, aiohttp.ClientResponseError):
        if 400 <= exception.status < 500:
            return ErrorCategory.CLIENT
        elif 500 <= exception.status < 600:
            return ErrorCategory.SERVER
        else:
            return ErrorCategory.UNKNOWN
    elif isinstance(exception, aiohttp.ClientError):
        return ErrorCategory.NETWORK
    elif isinstance(exception, (json.JSONDecodeError, ValueError)):
        return ErrorCategory.DATA
    else:
        return ErrorCategory.UNKNOWN


class QueryFetchError(Exception):
    """Raised when a query result could not be fetched from the query service."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN, query_id: Optional[int] = None):
        self.message = message
        self.category = category
        self.query_id = query_id
        super().__init__(self.message)

    def user_message(self) -> str:
        """Short message suitable for the dashboard."""
        prefixes = {
            ErrorCategory.TIMEOUT: "The query service did not answer in time",
            ErrorCategory.NETWORK: "Could not reach the query service",
            ErrorCategory.CLIENT: "The query service rejected the request",
            ErrorCategory.SERVER: "The query service failed",
            ErrorCategory.DATA: "The query service returned an unexpected response",
        }
        prefix = prefixes.get(self.category, "Query fetch failed")
        return f"{prefix}: {self.message}"
