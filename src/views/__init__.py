"""View derivation (filter, sort, group) over synced rows."""

from .deriver import (
    DerivedView,
    derive_view,
    filter_rows,
    filter_value_suggestions,
    group_rows,
    sort_rows,
    visible_summary,
)
from .frame import rows_to_frame, view_to_frame

__all__ = [
    "DerivedView",
    "derive_view",
    "filter_rows",
    "filter_value_suggestions",
    "group_rows",
    "sort_rows",
    "visible_summary",
    "rows_to_frame",
    "view_to_frame",
]
