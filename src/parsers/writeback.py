"""Map a plain edited value back into the remote per-type update payload."""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, Optional

from models.fields import FieldType, is_read_only

from .numbers import parse_strict_float

_CHECKED = re.compile(r"^(1|true|yes)$", re.IGNORECASE)


def _text_runs(value: str) -> list[dict[str, Any]]:
    return [{"text": {"content": value}}]


def _number(value: str) -> Optional[float]:
    if value == "":
        return None
    number = parse_strict_float(value)
    if number is not None and number.is_integer():
        return int(number)
    return number


def _checkbox(value: str) -> bool:
    return bool(_CHECKED.match(value.strip()))


_PAYLOADS: dict[str, Callable[[str], Any]] = {
    FieldType.TITLE.value: _text_runs,
    FieldType.RICH_TEXT.value: _text_runs,
    FieldType.NUMBER.value: _number,
    FieldType.CHECKBOX.value: _checkbox,
    FieldType.DATE.value: lambda v: {"start": v, "end": None} if v else None,
    FieldType.URL.value: lambda v: v or None,
    FieldType.SELECT.value: lambda v: {"name": v} if v else None,
    FieldType.STATUS.value: lambda v: {"name": v} if v else None,
}


def build_update(property_name: str, field_type: Optional[str], value: str) -> dict[str, Any]:
    """Return ``{property_name: {"type": t, t: payload}}`` for a page update.

    Unrecognized types are written as rich text. Read-only types raise
    ``ValueError``; callers must not offer them for editing.
    """
    if isinstance(field_type, Enum):
        field_type = field_type.value
    if is_read_only(field_type):
        raise ValueError(f"{field_type} properties are read-only")
    value = value if isinstance(value, str) else ("" if value is None else str(value))
    if field_type not in _PAYLOADS:
        field_type = FieldType.RICH_TEXT.value
    return {property_name: {"type": field_type, field_type: _PAYLOADS[field_type](value)}}


__all__ = ["build_update"]
