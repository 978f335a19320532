"""Locate and validate the tabular part of a query service response.

The query service answers with loosely typed JSON. A result is tabular when it
carries ``query_result.data`` with a ``columns`` list (each entry a mapping
with a string ``name``) and a ``rows`` list of mappings. Anything else is a
structural mismatch: ``extract_table`` returns ``None`` and the caller shows
the raw payload instead.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from .table import ColumnRef, Row, Table

logger = logging.getLogger(__name__)

RESULT_PATH = ("query_result", "data")


def _descend(payload: Any, path: Tuple[str, ...]) -> Optional[Mapping]:
    node = payload
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            logger.debug(f"Payload is not tabular: missing '{key}'")
            return None
        node = node[key]
    return node if isinstance(node, Mapping) else None


def _parse_columns(raw_columns: Any) -> Optional[Tuple[ColumnRef, ...]]:
    if not isinstance(raw_columns, list):
        return None

    columns: List[ColumnRef] = []
    seen = set()
    for entry in raw_columns:
        if not isinstance(entry, Mapping):
            return None
        name = entry.get("name")
        if not isinstance(name, str) or name in seen:
            return None
        seen.add(name)
        metadata = {key: value for key, value in entry.items() if key != "name"}
        columns.append(ColumnRef(name=name, metadata=metadata))
    return tuple(columns)


def _parse_rows(raw_rows: Any) -> Optional[List[Row]]:
    if not isinstance(raw_rows, list):
        return None
    if not all(isinstance(row, Mapping) for row in raw_rows):
        return None
    return [row if isinstance(row, dict) else dict(row) for row in raw_rows]


def decode_payload(payload: Any) -> Any:
    """Decode a payload delivered as JSON text; other values pass through."""
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            return json.loads(payload)
        except (ValueError, TypeError):
            logger.debug("Payload text is not valid JSON")
            return None
    return payload


def extract_table(payload: Any) -> Optional[Table]:
    """Extract a normalized Table from an arbitrary decoded JSON value.

    Args:
        payload: Whatever the query service returned. JSON text is decoded first.

    Returns:
        The Table, or None when the payload does not have the tabular shape.
    """
    data = _descend(decode_payload(payload), RESULT_PATH)
    if data is None:
        return None

    columns = _parse_columns(data.get("columns"))
    if columns is None:
        logger.debug("Payload is not tabular: malformed 'columns'")
        return None

    rows = _parse_rows(data.get("rows"))
    if rows is None:
        logger.debug("Payload is not tabular: malformed 'rows'")
        return None

    logger.debug(f"Extracted table with {len(columns)} columns and {len(rows)} rows")
    return Table(columns=columns, rows=rows)
