"""Field decoding, display formatting, column inference and write-back mapping."""

from .columns import infer_columns, merge_schema_options
from .decoder import decode, decode_properties, decode_property, decode_record
from .formatting import format_for_display
from .writeback import build_update

__all__ = [
    "infer_columns",
    "merge_schema_options",
    "decode",
    "decode_properties",
    "decode_property",
    "decode_record",
    "format_for_display",
    "build_update",
]
