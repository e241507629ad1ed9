"""Presentation-only rendering of decoded cell strings."""
from __future__ import annotations

import re
from datetime import datetime

from models.table import PLACEHOLDER

from .numbers import parse_strict_float

CHECK_MARK = "✓"
_TRUTHY = re.compile(r"^(1|true|yes|✓)$", re.IGNORECASE)
# fromisoformat only accepts a "Z" suffix from 3.11 on
_ZULU = re.compile(r"[Zz]$")


def is_truthy(value: str) -> bool:
    return bool(_TRUTHY.match((value or "").strip()))


def _format_date(value: str, date_format: str) -> str:
    try:
        parsed = datetime.fromisoformat(_ZULU.sub("+00:00", value.strip()))
    except ValueError:
        return value
    return parsed.strftime(date_format)


def _format_number(value: str) -> str:
    number = parse_strict_float(value.replace(",", ""))
    if number is None:
        return value
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.3f}".rstrip("0").rstrip(".")


def format_for_display(field_type: str, value: str, *, date_format: str = "%x") -> str:
    if not value:
        return PLACEHOLDER
    if field_type == "checkbox":
        return CHECK_MARK if is_truthy(value) else PLACEHOLDER
    if field_type == "date":
        return _format_date(value, date_format)
    if field_type == "number":
        return _format_number(value)
    return value


__all__ = ["format_for_display", "is_truthy", "CHECK_MARK"]
