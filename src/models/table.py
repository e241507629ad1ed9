"""Local table state: columns, rows, view parameters and the in-progress edit."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .fields import ENUMERABLE_TYPES, is_read_only

# Rendered for empty cells; filtering and grouping treat it as "empty".
PLACEHOLDER = "—"

CREATED_TIME = "created_time"
LAST_EDITED_TIME = "last_edited_time"

TIMESTAMP_KEYS: dict[str, str] = {
    CREATED_TIME: CREATED_TIME,
    LAST_EDITED_TIME: LAST_EDITED_TIME,
    "createdAt": CREATED_TIME,
    "lastEditedAt": LAST_EDITED_TIME,
}


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class FilterOp(str, Enum):
    CONTAINS = "contains"
    EQUALS = "equals"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"

    @property
    def needs_value(self) -> bool:
        return self in (FilterOp.CONTAINS, FilterOp.EQUALS)


@dataclass(frozen=True)
class SelectOption:
    name: str
    color: str = "default"


@dataclass(frozen=True)
class ColumnDef:
    name: str
    property_name: str
    type: str
    options: tuple[SelectOption, ...] = ()

    @property
    def read_only(self) -> bool:
        return is_read_only(self.type)

    @property
    def enumerable(self) -> bool:
        return self.type in {t.value for t in ENUMERABLE_TYPES}


@dataclass(frozen=True)
class RowData:
    record_id: str
    cells: dict[str, str] = field(default_factory=dict)
    created_at: Optional[str] = None
    last_edited_at: Optional[str] = None

    def timestamp(self, key: str) -> str:
        canonical = TIMESTAMP_KEYS.get(key)
        if canonical == CREATED_TIME:
            return self.created_at or ""
        if canonical == LAST_EDITED_TIME:
            return self.last_edited_at or ""
        return ""

    def with_cell(self, property_name: str, value: str) -> "RowData":
        """Copy of this row with one cell replaced."""
        return replace(self, cells={**self.cells, property_name: value})


@dataclass(frozen=True)
class ViewParams:
    """Active sort / group / filter configuration. Holds no derived data."""

    sort_key: str = ""
    sort_direction: SortDirection = SortDirection.ASCENDING
    group_key: str = ""
    filter_key: str = ""
    filter_op: FilterOp = FilterOp.CONTAINS
    filter_value: str = ""

    @property
    def descending(self) -> bool:
        return SortDirection(self.sort_direction) is SortDirection.DESCENDING

    @property
    def timestamp_sort(self) -> Optional[str]:
        return TIMESTAMP_KEYS.get(self.sort_key)

    @property
    def filter_needs_value(self) -> bool:
        return bool(self.filter_key) and FilterOp(self.filter_op).needs_value

    @property
    def sort_option(self) -> str:
        """``"<key>:asc"`` / ``"<key>:desc"`` menu encoding of the sort, or ``""``."""
        if not self.sort_key:
            return ""
        return f"{self.sort_key}:{'desc' if self.descending else 'asc'}"

    def with_sort_option(self, option: str) -> "ViewParams":
        key, _, direction = (option or "").rpartition(":")
        if not key:
            # no direction suffix
            key, direction = direction, "asc"
        if direction not in ("asc", "desc"):
            key, direction = f"{key}:{direction}", "asc"
        return replace(
            self,
            sort_key=key,
            sort_direction=SortDirection.DESCENDING if direction == "desc" else SortDirection.ASCENDING,
        )


@dataclass(frozen=True)
class EditingCell:
    record_id: str
    property_name: str
    type: Optional[str] = None
    value: str = ""


@dataclass(frozen=True)
class RowGroup:
    value: str
    rows: tuple[RowData, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class TableState:
    columns: list[ColumnDef] = field(default_factory=list)
    rows: list[RowData] = field(default_factory=list)
    view: ViewParams = field(default_factory=ViewParams)
    editing: Optional[EditingCell] = None
    last_synced: str = ""
    error: str = ""

    def column(self, property_name: str) -> Optional[ColumnDef]:
        for col in self.columns:
            if col.property_name == property_name:
                return col
        return None

    def row(self, record_id: str) -> Optional[RowData]:
        for row in self.rows:
            if row.record_id == record_id:
                return row
        return None


__all__ = [
    "PLACEHOLDER",
    "CREATED_TIME",
    "LAST_EDITED_TIME",
    "TIMESTAMP_KEYS",
    "SortDirection",
    "FilterOp",
    "SelectOption",
    "ColumnDef",
    "RowData",
    "ViewParams",
    "EditingCell",
    "RowGroup",
    "TableState",
]
