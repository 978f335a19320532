"""
Tests for the query service client.
"""
import asyncio
from unittest import mock

import aiohttp
import pytest

from api.error_handling import ErrorCategory, QueryFetchError, categorize_error
from api.query_client import QueryResultClient, parse_metadata
from config.api import APIConfig


@pytest.fixture
def client(mock_logger):
    return QueryResultClient(logger_obj=mock_logger, api_key="secret", timeout=5)


class TestParseMetadata:
    def test_reads_name_author_and_latest_id(self):
        data = {"body": {"latest_query_data_id": 991, "name": "Revenue", "user": {"name": "Dana", "email": "d@x.io"}}}

        metadata = parse_metadata(12, data)

        assert metadata.query_id == 12
        assert metadata.latest_query_data_id == "991"
        assert metadata.name == "Revenue"
        assert metadata.author == "Dana"

    @pytest.mark.parametrize(
        "user, expected",
        [("dana", "dana"), ({"email": "d@x.io"}, "d@x.io"), ({}, None), (None, None), ("", None), (42, None)],
    )
    def test_author_shapes(self, user, expected):
        data = {"body": {"latest_query_data_id": "1", "user": user}}
        assert parse_metadata(1, data).author == expected

    def test_blank_name_is_none(self):
        assert parse_metadata(1, {"body": {"latest_query_data_id": "1", "name": ""}}).name is None

    @pytest.mark.parametrize("data", [None, [], {}, {"body": "x"}, {"body": {}}, {"body": {"latest_query_data_id": ""}}])
    def test_malformed_metadata_is_a_data_error(self, data):
        with pytest.raises(QueryFetchError) as excinfo:
            parse_metadata(3, data)

        assert excinfo.value.category == ErrorCategory.DATA
        assert excinfo.value.query_id == 3


class TestFetchJson:
    @pytest.mark.asyncio
    async def test_returns_decoded_body(self, client, mock_aiohttp_session):
        session, response = mock_aiohttp_session
        response.json.return_value = {"ok": True}

        data = await client.fetch_json(session, "http://service/q", 1)

        assert data == {"ok": True}
        _, kwargs = session.get.call_args
        assert kwargs["headers"]["Authorization"] == "Key secret"
        assert kwargs["timeout"].total == 5
        response.json.assert_awaited_once_with(content_type=None)

    @pytest.mark.asyncio
    async def test_http_error_is_categorized(self, client, mock_aiohttp_session, mock_logger):
        session, response = mock_aiohttp_session
        response.raise_for_status.side_effect = aiohttp.ClientResponseError(
            request_info=mock.MagicMock(), history=(), status=503, message="unavailable"
        )

        with pytest.raises(QueryFetchError) as excinfo:
            await client.fetch_json(session, "http://service/q", 4)

        assert excinfo.value.category == ErrorCategory.SERVER
        assert excinfo.value.query_id == 4
        mock_logger.assert_logged("error", "failed with server error")

    @pytest.mark.asyncio
    async def test_timeout_is_categorized(self, client, mock_aiohttp_session):
        session, _ = mock_aiohttp_session
        session.get.side_effect = asyncio.TimeoutError()

        with pytest.raises(QueryFetchError) as excinfo:
            await client.fetch_json(session, "http://service/q", 4)

        assert excinfo.value.category == ErrorCategory.TIMEOUT
        assert excinfo.value.message == "TimeoutError"

    @pytest.mark.asyncio
    async def test_invalid_json_is_a_data_error(self, client, mock_aiohttp_session):
        session, response = mock_aiohttp_session
        response.json.side_effect = ValueError("Expecting value")

        with pytest.raises(QueryFetchError) as excinfo:
            await client.fetch_json(session, "http://service/q", 4)

        assert excinfo.value.category == ErrorCategory.DATA


class TestFetch:
    @pytest.mark.asyncio
    async def test_fetches_metadata_then_result(self, client, monkeypatch):
        monkeypatch.setenv(APIConfig.BASE_URL_ENV_VAR, "http://service/webhook/")
        payload = {"query_result": {"data": {"columns": [], "rows": []}}}
        fetch_json = mock.AsyncMock(
            side_effect=[{"body": {"latest_query_data_id": 77, "name": "Sales", "user": "dana"}}, payload]
        )

        with mock.patch("api.query_client.aiohttp.ClientSession"), \
             mock.patch.object(client, "fetch_json", fetch_json):
            result = await client.fetch(5)

        assert result.query_id == 5
        assert result.payload is payload
        assert result.title == "Sales"
        assert result.author == "dana"

        urls = [call.args[1] for call in fetch_json.await_args_list]
        assert urls == [
            "http://service/webhook?item-id=5&api-type=pre",
            "http://service/webhook?item-id=5&api-type=plain&query-data-id=77",
        ]

    @pytest.mark.asyncio
    async def test_metadata_error_stops_the_fetch(self, client):
        fetch_json = mock.AsyncMock(return_value={"body": {}})

        with mock.patch("api.query_client.aiohttp.ClientSession"), \
             mock.patch.object(client, "fetch_json", fetch_json):
            with pytest.raises(QueryFetchError):
                await client.fetch(5)

        assert fetch_json.await_count == 1


class TestErrorHandling:
    def test_categorize_known_exceptions(self):
        assert categorize_error(asyncio.TimeoutError()) == ErrorCategory.TIMEOUT
        assert categorize_error(aiohttp.ClientError()) == ErrorCategory.NETWORK
        assert categorize_error(ValueError("bad")) == ErrorCategory.DATA
        assert categorize_error(RuntimeError("x")) == ErrorCategory.UNKNOWN

    def test_categorize_client_status(self):
        error = aiohttp.ClientResponseError(request_info=mock.MagicMock(), history=(), status=404)
        assert categorize_error(error) == ErrorCategory.CLIENT

    def test_fetch_error_keeps_its_category(self):
        error = QueryFetchError("no body", ErrorCategory.DATA)
        assert categorize_error(error) == ErrorCategory.DATA

    def test_user_message(self):
        assert QueryFetchError("boom", ErrorCategory.SERVER).user_message() == "The query service failed: boom"
        assert QueryFetchError("boom").user_message() == "Query fetch failed: boom"


class TestAPIConfig:
    def test_headers_without_key(self, monkeypatch):
        monkeypatch.delenv(APIConfig.API_KEY_ENV_VAR, raising=False)
        assert APIConfig.get_headers() == {"Content-Type": "application/json"}

    def test_headers_with_env_key(self, monkeypatch):
        monkeypatch.setenv(APIConfig.API_KEY_ENV_VAR, "abc")
        assert APIConfig.get_headers()["Authorization"] == "Key abc"

    def test_default_base_url(self, monkeypatch):
        monkeypatch.delenv(APIConfig.BASE_URL_ENV_VAR, raising=False)
        assert APIConfig.get_metadata_url(3) == "http://localhost:5000/webhook/query?item-id=3&api-type=pre"
