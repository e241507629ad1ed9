"""
Data models for remote field values and the local table state
"""

from .fields import FieldType, is_read_only, parse_field
from .remote import DatabaseSchema, QueryResult, RemoteRecord
from .table import (
    PLACEHOLDER,
    ColumnDef,
    EditingCell,
    FilterOp,
    RowData,
    RowGroup,
    SelectOption,
    SortDirection,
    TableState,
    ViewParams,
)

__all__ = [
    "FieldType",
    "is_read_only",
    "parse_field",
    "DatabaseSchema",
    "QueryResult",
    "RemoteRecord",
    "PLACEHOLDER",
    "ColumnDef",
    "EditingCell",
    "FilterOp",
    "RowData",
    "RowGroup",
    "SelectOption",
    "SortDirection",
    "TableState",
    "ViewParams",
]
