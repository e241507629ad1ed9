"""Decode typed remote field values into plain cell strings.

Every function here is total: unknown tags and malformed payloads decode to
``""`` instead of raising.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional

from models.fields import (
    CheckboxField,
    DateField,
    FormulaField,
    MultiSelectField,
    NumberField,
    PeopleField,
    RichTextField,
    RichTextRun,
    RollupField,
    SelectField,
    StatusField,
    TitleField,
    UrlField,
    parse_field,
)
from models.remote import RemoteRecord
from models.table import ColumnDef, RowData

from .numbers import number_text


def _yes_no(flag: Any) -> str:
    return "Yes" if flag else "No"


def rich_text_to_str(runs: Optional[Iterable[RichTextRun]]) -> str:
    parts = []
    for run in runs or []:
        if run.plain_text is not None:
            parts.append(run.plain_text)
        elif run.text is not None and run.text.content is not None:
            parts.append(run.text.content)
    return "".join(parts)


def _names(options) -> list[str]:
    return [o.name for o in options or [] if o.name]


def _formula(value: FormulaField) -> str:
    result = value.formula
    if result is None:
        return ""
    if result.string is not None:
        return result.string
    if result.number is not None:
        return number_text(result.number)
    if result.boolean is not None:
        return _yes_no(result.boolean)
    return ""


def _rollup(value: RollupField) -> str:
    result = value.rollup
    if result is None:
        return ""
    if result.number is not None:
        return number_text(result.number)
    if result.array is not None:
        return str(len(result.array))
    return ""


_DECODERS: dict[type, Callable[[Any], str]] = {
    TitleField: lambda v: rich_text_to_str(v.title),
    RichTextField: lambda v: rich_text_to_str(v.rich_text),
    NumberField: lambda v: number_text(v.number),
    SelectField: lambda v: (v.select.name or "") if v.select else "",
    StatusField: lambda v: (v.status.name or "") if v.status else "",
    MultiSelectField: lambda v: ", ".join(o.name or "" for o in v.multi_select or []),
    CheckboxField: lambda v: _yes_no(v.checkbox),
    DateField: lambda v: (v.date.start or "") if v.date else "",
    UrlField: lambda v: v.url or "",
    PeopleField: lambda v: ", ".join(_names(v.people)),
    FormulaField: _formula,
    RollupField: _rollup,
}


def decode_field(value: Any) -> str:
    """Decode an already parsed field model."""
    decoder = _DECODERS.get(type(value))
    return decoder(value) if decoder else ""


def decode_property(raw: Any) -> str:
    """Decode one raw ``{"type": ..., <type>: ...}`` property object."""
    return decode_field(parse_field(raw))


def decode(field_type: Any, raw_value: Any) -> str:
    """Decode the type-specific member of a property (e.g. ``decode("checkbox", True)``)."""
    if isinstance(field_type, Enum):
        field_type = field_type.value
    if not isinstance(field_type, str):
        return ""
    return decode_property({"type": field_type, field_type: raw_value})


def decode_properties(properties: Mapping[str, Any]) -> dict[str, str]:
    cells: dict[str, str] = {}
    if not isinstance(properties, Mapping):
        return cells
    for key, value in properties.items():
        if not isinstance(value, dict):
            continue
        cells[key] = decode_property(value)
    return cells


def decode_record(record: RemoteRecord, columns: Iterable[ColumnDef] = ()) -> RowData:
    """Row for one record; every known column gets a cell, absent ones as ``""``."""
    cells = {col.property_name: "" for col in columns}
    cells.update(decode_properties(record.properties))
    return RowData(
        record_id=record.id,
        cells=cells,
        created_at=record.created_time,
        last_edited_at=record.last_edited_time,
    )


__all__ = [
    "decode",
    "decode_field",
    "decode_property",
    "decode_properties",
    "decode_record",
    "rich_text_to_str",
]
