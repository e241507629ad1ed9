"""Number parsing shared by decoding, sorting, grouping and write-back."""
from __future__ import annotations

import math
import re
from typing import Any, Optional

_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_leading_float(value: Any) -> Optional[float]:
    """Parse the longest numeric prefix of ``value`` ("12px" -> 12.0); None if there is none."""
    if value is None:
        return None
    match = _LEADING_FLOAT.match(str(value))
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_strict_float(value: Any) -> Optional[float]:
    """Parse the whole (trimmed) string as a finite float; None otherwise."""
    text = str(value).strip() if value is not None else ""
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def number_text(value: Any) -> str:
    """Render a JSON number the way the remote API prints it (``3`` not ``3.0``)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        return ""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


__all__ = ["parse_leading_float", "parse_strict_float", "number_text"]
