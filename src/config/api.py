"""API configuration for the upstream query service."""

import os
from typing import Dict, Optional
from urllib.parse import urlencode


class APIConfig:
    """API configuration and settings."""

    # Query service endpoint
    BASE_URL_ENV_VAR = "BAROBOARD_API_URL"
    DEFAULT_BASE_URL = "http://localhost:5000/webhook/query"

    # Credentials
    API_KEY_ENV_VAR = "BAROBOARD_API_KEY"

    # Request settings
    REQUEST_TIMEOUT = 10

    # Endpoint flavours understood by the query service
    METADATA_API_TYPE = "pre"
    RESULT_API_TYPE = "plain"

    @classmethod
    def get_base_url(cls) -> str:
        """Get the query service base URL, honouring the environment override."""
        return os.environ.get(cls.BASE_URL_ENV_VAR, cls.DEFAULT_BASE_URL).rstrip("/")

    @classmethod
    def get_api_key(cls) -> Optional[str]:
        """Get the API key if one is configured."""
        return os.environ.get(cls.API_KEY_ENV_VAR) or None

    @classmethod
    def get_headers(cls, api_key: Optional[str] = None) -> Dict[str, str]:
        """Build request headers, adding the Authorization header when a key is known."""
        headers = {"Content-Type": "application/json"}
        key = api_key or cls.get_api_key()
        if key:
            headers["Authorization"] = f"Key {key}"
        return headers

    @classmethod
    def get_metadata_url(cls, query_id: int) -> str:
        """Get the URL returning query metadata (name, author, latest result id)."""
        params = {"item-id": query_id, "api-type": cls.METADATA_API_TYPE}
        return f"{cls.get_base_url()}?{urlencode(params)}"

    @classmethod
    def get_result_url(cls, query_id: int, query_data_id: str) -> str:
        """Get the URL returning the tabular result payload of a query."""
        params = {
            "item-id": query_id,
            "api-type": cls.RESULT_API_TYPE,
            "query-data-id": query_data_id,
        }
        return f"{cls.get_base_url()}?{urlencode(params)}"
