"""Result table model, extraction and type inference."""

from .table import ColumnRef, ColumnType, Table
from .table_extractor import extract_table
from .type_inference import ColumnGroups, infer_column_types, partition_columns

__all__ = [
    "ColumnRef",
    "ColumnType",
    "Table",
    "ColumnGroups",
    "extract_table",
    "infer_column_types",
    "partition_columns",
]
