"""Client for the upstream query service.

Fetching a result takes two calls: the metadata call returns the query name,
its author and the id of the latest stored result; the result call returns
the payload for that id. Retries are left to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from config.api import APIConfig

from .error_handling import QueryFetchError, categorize_error, ErrorCategory


@dataclass(frozen=True)
class QueryMetadata:
    """Query metadata returned by the metadata call."""

    query_id: int
    latest_query_data_id: str
    name: Optional[str] = None
    author: Optional[str] = None


@dataclass(frozen=True)
class QueryFetchResult:
    """A fetched query result, tagged with the query it belongs to."""

    query_id: int
    payload: Any
    title: Optional[str] = None
    author: Optional[str] = None


def _author_from(user: Any) -> Optional[str]:
    # The service sends the author either as a plain string or as a user object
    if isinstance(user, str):
        return user or None
    if isinstance(user, dict):
        return user.get("name") or user.get("email") or None
    return None


def parse_metadata(query_id: int, data: Any) -> QueryMetadata:
    """Read query metadata out of the metadata call's response body."""
    body = data.get("body") if isinstance(data, dict) else None
    if not isinstance(body, dict):
        raise QueryFetchError("metadata response has no body", ErrorCategory.DATA, query_id)

    latest_id = body.get("latest_query_data_id")
    if latest_id in (None, ""):
        raise QueryFetchError("latest_query_data_id is missing", ErrorCategory.DATA, query_id)

    name = body.get("name")
    return QueryMetadata(
        query_id=query_id,
        latest_query_data_id=str(latest_id),
        name=name if isinstance(name, str) and name else None,
        author=_author_from(body.get("user")),
    )


class QueryResultClient:
    """Fetches query results from the query service."""

    def __init__(
        self,
        logger_obj: Optional[logging.Logger] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.logger = logger_obj or logging.getLogger(__name__)
        self.config = APIConfig()
        self.api_key = api_key
        self.timeout = timeout if timeout is not None else self.config.REQUEST_TIMEOUT

    def _headers(self) -> Dict[str, str]:
        return self.config.get_headers(self.api_key)

    async def fetch_json(self, session: aiohttp.ClientSession, url: str, query_id: int) -> Any:
        """GET a URL and decode its JSON body, raising QueryFetchError on failure."""
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with session.get(url, headers=self._headers(), timeout=timeout) as resp:
                resp.raise_for_status()
                return await resp.json(content_type=None)
        except QueryFetchError:
            raise
        except Exception as e:
            error_category = categorize_error(e)
            self.logger.error(f"Request for query {query_id} failed with {error_category.value} error: {e}")
            raise QueryFetchError(str(e) or type(e).__name__, error_category, query_id) from e

    async def fetch_metadata(self, session: aiohttp.ClientSession, query_id: int) -> QueryMetadata:
        data = await self.fetch_json(session, self.config.get_metadata_url(query_id), query_id)
        metadata = parse_metadata(query_id, data)
        self.logger.debug(
            f"Metadata for query {query_id}: name={metadata.name!r}, "
            f"latest_query_data_id={metadata.latest_query_data_id}"
        )
        return metadata

    async def fetch(self, query_id: int) -> QueryFetchResult:
        """Fetch the latest result of a query together with its name and author."""
        self.logger.info(f"Fetching result for query {query_id}")
        async with aiohttp.ClientSession() as session:
            metadata = await self.fetch_metadata(session, query_id)
            payload = await self.fetch_json(
                session,
                self.config.get_result_url(query_id, metadata.latest_query_data_id),
                query_id,
            )
        return QueryFetchResult(
            query_id=query_id,
            payload=payload,
            title=metadata.name,
            author=metadata.author,
        )
