"""
Filter -> sort -> group projection over the synced rows.

Each stage is a pure function over a row sequence and the view parameters, so
callers can ask for filtered-only, filtered+sorted or fully grouped results.
No stage mutates its input rows or the stored table state.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Optional, Sequence

from loguru import logger

from models.table import PLACEHOLDER, ColumnDef, FilterOp, RowData, RowGroup, ViewParams
from parsers.numbers import parse_leading_float

MAX_FILTER_SUGGESTIONS = 50


def _column(columns: Sequence[ColumnDef], key: str) -> Optional[ColumnDef]:
    if not key:
        return None
    for col in columns:
        if col.property_name == key:
            return col
    return None


def _is_empty(value: str) -> bool:
    return not value or value == PLACEHOLDER


def filter_rows(
    rows: Sequence[RowData], columns: Sequence[ColumnDef], params: ViewParams
) -> list[RowData]:
    if _column(columns, params.filter_key) is None:
        return list(rows)
    try:
        op = FilterOp(params.filter_op)
    except ValueError:
        logger.warning(f"Unknown filter operator {params.filter_op!r}; showing all rows")
        return list(rows)
    needle = (params.filter_value or "").strip().lower()
    if op.needs_value and not needle:
        return list(rows)

    key = params.filter_key

    def keep(row: RowData) -> bool:
        value = row.cells.get(key, "").lower()
        if op is FilterOp.CONTAINS:
            return needle in value
        if op is FilterOp.EQUALS:
            return value == needle
        if op is FilterOp.IS_EMPTY:
            return _is_empty(value)
        return not _is_empty(value)

    kept = [row for row in rows if keep(row)]
    logger.debug(f"Filter {key} {op.value} {needle!r}: {len(kept)}/{len(rows)} rows")
    return kept


def sort_rows(
    rows: Sequence[RowData], columns: Sequence[ColumnDef], params: ViewParams
) -> list[RowData]:
    key = params.sort_key
    if not key:
        return list(rows)

    if params.timestamp_sort:
        def sort_value(row: RowData):
            return row.timestamp(key)
    else:
        col = _column(columns, key)
        numeric = col is not None and col.type == "number"

        def sort_value(row: RowData):
            value = row.cells.get(key, "")
            if numeric:
                number = parse_leading_float(value)
                return 0.0 if number is None else number
            return value.lower()

    # sorted() is stable in both directions, so ties keep their prior order
    return sorted(rows, key=sort_value, reverse=params.descending)


def _bucket_order(numeric: bool):
    def compare(a: str, b: str) -> int:
        if numeric:
            na, nb = parse_leading_float(a), parse_leading_float(b)
            if na is not None and nb is not None:
                return (na > nb) - (na < nb)
        ka, kb = (a.lower(), a), (b.lower(), b)
        return (ka > kb) - (ka < kb)

    return cmp_to_key(compare)


def group_rows(
    rows: Sequence[RowData], columns: Sequence[ColumnDef], params: ViewParams
) -> list[RowGroup]:
    col = _column(columns, params.group_key)
    if col is None:
        return [RowGroup(value="", rows=tuple(rows))]

    buckets: dict[str, list[RowData]] = {}
    for row in rows:
        buckets.setdefault(row.cells.get(col.property_name, PLACEHOLDER), []).append(row)

    order = sorted(buckets, key=_bucket_order(col.type == "number"))
    return [RowGroup(value=value, rows=tuple(buckets[value])) for value in order]


@dataclass(frozen=True)
class DerivedView:
    filtered: tuple[RowData, ...]
    sorted: tuple[RowData, ...]
    groups: tuple[RowGroup, ...]
    total: int

    @property
    def grouped(self) -> bool:
        return len(self.groups) != 1 or bool(self.groups[0].value)


def derive_view(
    columns: Sequence[ColumnDef], rows: Sequence[RowData], params: ViewParams
) -> DerivedView:
    filtered = filter_rows(rows, columns, params)
    ordered = sort_rows(filtered, columns, params)
    groups = group_rows(ordered, columns, params)
    return DerivedView(
        filtered=tuple(filtered),
        sorted=tuple(ordered),
        groups=tuple(groups),
        total=len(rows),
    )


def filter_value_suggestions(
    rows: Sequence[RowData], filter_key: str, limit: int = MAX_FILTER_SUGGESTIONS
) -> list[str]:
    """Distinct non-empty values of a column, sorted, for a filter value picker."""
    if not filter_key:
        return []
    values = {row.cells.get(filter_key, "").strip() for row in rows}
    values.discard("")
    values.discard(PLACEHOLDER)
    return sorted(values, key=lambda v: (v.lower(), v))[:limit]


def visible_summary(view: DerivedView, params: ViewParams) -> str:
    if not params.filter_key:
        return ""
    return f"Showing {len(view.filtered)} of {view.total}"


def sort_options(columns: Sequence[ColumnDef]) -> list[tuple[str, str]]:
    """(option, label) pairs for a sort picker; options use the ``key:dir`` encoding."""
    options = [("", "Sort: None")]
    for col in columns:
        options.append((f"{col.property_name}:asc", f"{col.name} ↑"))
        options.append((f"{col.property_name}:desc", f"{col.name} ↓"))
    options += [
        ("created_time:asc", "Created ↑"),
        ("created_time:desc", "Created ↓"),
        ("last_edited_time:asc", "Last edited ↑"),
        ("last_edited_time:desc", "Last edited ↓"),
    ]
    return options


def group_options(columns: Sequence[ColumnDef]) -> list[tuple[str, str]]:
    return [("", "Group: None")] + [(c.property_name, f"By {c.name}") for c in columns]


def filter_options(columns: Sequence[ColumnDef]) -> list[tuple[str, str]]:
    return [("", "Filter: None")] + [(c.property_name, c.name) for c in columns]


__all__ = [
    "filter_rows",
    "sort_rows",
    "group_rows",
    "derive_view",
    "DerivedView",
    "filter_value_suggestions",
    "visible_summary",
    "sort_options",
    "group_options",
    "filter_options",
]
