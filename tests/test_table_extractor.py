"""
Tests for extracting result tables from query service payloads.
"""
import json

import pytest

from data.table import ColumnRef, Table
from data.table_extractor import decode_payload, extract_table


class TestExtractTable:
    """Successful extraction."""

    def test_round_trip(self, payload_factory):
        """The canonical example extracts to the same columns and rows."""
        payload = payload_factory(["a"], [{"a": 1}, {"a": 2}])

        table = extract_table(payload)

        assert isinstance(table, Table)
        assert table.to_dict() == {"columns": [{"name": "a"}], "rows": [{"a": 1}, {"a": 2}]}

    def test_preserves_column_and_row_order(self, payload_factory):
        rows = [{"b": i, "a": -i} for i in range(5)]
        table = extract_table(payload_factory(["b", "a"], rows))

        assert table.column_names == ["b", "a"]
        assert table.rows == rows

    def test_keeps_extra_column_metadata(self):
        payload = {
            "query_result": {
                "data": {
                    "columns": [{"name": "count", "type": "integer", "friendly_name": "Count"}],
                    "rows": [{"count": 3}],
                }
            }
        }

        table = extract_table(payload)

        assert table.columns == (ColumnRef("count"),)
        assert table.columns[0].metadata == {"type": "integer", "friendly_name": "Count"}
        assert table.to_dict()["columns"] == [{"type": "integer", "friendly_name": "Count", "name": "count"}]

    def test_rows_with_missing_keys_are_accepted(self, payload_factory):
        table = extract_table(payload_factory(["a", "b"], [{"a": 1}, {"b": "x"}, {}]))

        assert table.row_count == 3
        assert table.column_values("b") == [None, "x", None]

    def test_empty_rows_are_a_table(self, payload_factory):
        table = extract_table(payload_factory(["a"], []))

        assert table is not None
        assert table.row_count == 0
        assert table.is_empty

    def test_json_text_payload_is_decoded(self, payload_factory):
        text = json.dumps(payload_factory(["a"], [{"a": 1}]))

        table = extract_table(text)

        assert table.rows == [{"a": 1}]

    def test_extra_envelope_keys_are_ignored(self, payload_factory):
        payload = payload_factory(["a"], [{"a": 1}])
        payload["query_result"]["id"] = 42
        payload["job"] = {"status": 3}

        assert extract_table(payload).column_names == ["a"]


class TestNotTabular:
    """Every structural mismatch yields None instead of raising."""

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            {},
            [],
            42,
            "not json",
            b"\xff\xfe",
            {"query_result": None},
            {"query_result": {"data": None}},
            {"query_result": {"data": []}},
            {"query_result": {"data": {"columns": []}}},
            {"query_result": {"data": {"rows": []}}},
            {"query_result": {"data": {"columns": "a", "rows": []}}},
            {"query_result": {"data": {"columns": [], "rows": {}}}},
            {"query_result": {"data": {"columns": ["a"], "rows": []}}},
            {"query_result": {"data": {"columns": [{"title": "a"}], "rows": []}}},
            {"query_result": {"data": {"columns": [{"name": 1}], "rows": []}}},
            {"query_result": {"data": {"columns": [{"name": "a"}], "rows": [1, 2]}}},
            {"query_result": {"data": {"columns": [{"name": "a"}], "rows": [{"a": 1}, None]}}},
            {"data": {"columns": [{"name": "a"}], "rows": []}},
        ],
    )
    def test_returns_none(self, payload):
        assert extract_table(payload) is None

    def test_duplicate_column_names(self):
        payload = {
            "query_result": {"data": {"columns": [{"name": "a"}, {"name": "a"}], "rows": []}}
        }
        assert extract_table(payload) is None


class TestDecodePayload:
    def test_passes_through_decoded_values(self):
        value = {"query_result": {}}
        assert decode_payload(value) is value

    def test_invalid_text_becomes_none(self):
        assert decode_payload("{broken") is None
