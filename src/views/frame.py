"""pandas export of rows and derived views."""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from models.table import ColumnDef, RowData
from parsers.formatting import format_for_display

from .deriver import DerivedView

GROUP_COLUMN = "group"


def rows_to_frame(
    columns: Sequence[ColumnDef], rows: Sequence[RowData], *, formatted: bool = False
) -> pd.DataFrame:
    """DataFrame indexed by record id, one column per ColumnDef (labelled by name)."""
    records = []
    for row in rows:
        record = {}
        for col in columns:
            value = row.cells.get(col.property_name, "")
            record[col.name] = format_for_display(col.type, value) if formatted else value
        records.append(record)
    index = pd.Index([row.record_id for row in rows], name="record_id")
    return pd.DataFrame(records, columns=[col.name for col in columns], index=index)


def view_to_frame(
    columns: Sequence[ColumnDef], view: DerivedView, *, formatted: bool = True
) -> pd.DataFrame:
    """Flatten a derived view in display order; grouped views get a leading group column."""
    frames = []
    for group in view.groups:
        frame = rows_to_frame(columns, group.rows, formatted=formatted)
        if view.grouped:
            frame.insert(0, GROUP_COLUMN, group.value)
        frames.append(frame)
    if not frames:
        return rows_to_frame(columns, [], formatted=formatted)
    return pd.concat(frames)


__all__ = ["rows_to_frame", "view_to_frame", "GROUP_COLUMN"]
