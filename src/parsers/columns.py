"""Column inference from fetched records and schema option merging."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional, Sequence, Union

from models.fields import field_type_of
from models.remote import DatabaseSchema, RemoteRecord
from models.table import ColumnDef, SelectOption


def _properties_of(record: Union[RemoteRecord, dict[str, Any]]) -> dict[str, Any]:
    if isinstance(record, RemoteRecord):
        return record.properties
    if isinstance(record, dict) and isinstance(record.get("properties"), dict):
        return record["properties"]
    return {}


def infer_columns(records: Sequence[Union[RemoteRecord, dict[str, Any]]]) -> list[ColumnDef]:
    """One column per field of the first record, in that record's field order.

    With zero records there are zero columns, even when the schema lists
    properties; schema-only column derivation is not done here.
    """
    if not records:
        return []
    columns = []
    for name, value in _properties_of(records[0]).items():
        field_type = field_type_of(value)
        if field_type is None:
            continue
        columns.append(ColumnDef(name=name, property_name=name, type=field_type))
    return columns


def merge_schema_options(
    columns: Sequence[ColumnDef],
    schema: Optional[Union[DatabaseSchema, dict[str, Any]]],
) -> list[ColumnDef]:
    """Attach select/status option sets from the database schema."""
    if isinstance(schema, dict):
        schema = DatabaseSchema.parse(schema)
    if schema is None or not schema.properties:
        return list(columns)
    merged = []
    for col in columns:
        prop = schema.properties.get(col.property_name)
        options = [o for o in prop.options_for(col.type) if o.name] if prop and col.enumerable else []
        if not options:
            merged.append(col)
            continue
        merged.append(
            replace(
                col,
                options=tuple(SelectOption(name=o.name, color=o.color or "default") for o in options),
            )
        )
    return merged


__all__ = ["infer_columns", "merge_schema_options"]
