"""Typed remote field values.

A record's field map is a discriminated union keyed by ``type``; each supported
tag gets its own model and anything else lands in ``UnknownField``. Parsing is
total: shapes that fail validation degrade to ``UnknownField`` so callers never
see a ``ValidationError``.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    StrictBool,
    StrictFloat,
    StrictInt,
    Tag,
    TypeAdapter,
    ValidationError,
)

Number = Union[StrictInt, StrictFloat]


class FieldType(str, Enum):
    TITLE = "title"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    CHECKBOX = "checkbox"
    DATE = "date"
    URL = "url"
    STATUS = "status"
    FORMULA = "formula"
    ROLLUP = "rollup"
    PEOPLE = "people"


READ_ONLY_TYPES = frozenset({FieldType.FORMULA, FieldType.ROLLUP, FieldType.PEOPLE})
ENUMERABLE_TYPES = frozenset({FieldType.SELECT, FieldType.STATUS})

TYPE_LABELS: dict[str, str] = {
    FieldType.TITLE.value: "Title",
    FieldType.RICH_TEXT.value: "Text",
    FieldType.NUMBER.value: "Number",
    FieldType.SELECT.value: "Select",
    FieldType.MULTI_SELECT.value: "Multi",
    FieldType.CHECKBOX.value: "Check",
    FieldType.DATE.value: "Date",
    FieldType.URL.value: "URL",
    FieldType.STATUS.value: "Status",
    FieldType.FORMULA.value: "Formula",
    FieldType.ROLLUP.value: "Rollup",
    FieldType.PEOPLE.value: "People",
}

# option color name -> (background, text)
PILL_COLORS: dict[str, tuple[str, str]] = {
    "default": ("#F3F4F6", "#374151"),
    "gray": ("#E5E7EB", "#374151"),
    "brown": ("#E7D5C4", "#5C4033"),
    "orange": ("#FFE4CC", "#C2410C"),
    "yellow": ("#FEF3C7", "#92400E"),
    "green": ("#D1FAE5", "#065F46"),
    "blue": ("#DBEAFE", "#1E40AF"),
    "purple": ("#EDE9FE", "#5B21B6"),
    "pink": ("#FCE7F3", "#9D174D"),
    "red": ("#FEE2E2", "#991B1B"),
}


def is_read_only(field_type: Optional[str]) -> bool:
    return field_type in {t.value for t in READ_ONLY_TYPES}


def type_label(field_type: str) -> str:
    return TYPE_LABELS.get(field_type, field_type)


def pill_colors(color: Optional[str]) -> tuple[str, str]:
    return PILL_COLORS.get(color or "default", PILL_COLORS["default"])


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TextContent(_Payload):
    content: Optional[str] = None


class RichTextRun(_Payload):
    plain_text: Optional[str] = None
    text: Optional[TextContent] = None


class NamedOption(_Payload):
    name: Optional[str] = None


class DateRange(_Payload):
    start: Optional[str] = None
    end: Optional[str] = None


class FormulaResult(_Payload):
    type: Optional[str] = None
    string: Optional[str] = None
    number: Optional[Number] = None
    boolean: Optional[StrictBool] = None


class RollupResult(_Payload):
    type: Optional[str] = None
    number: Optional[Number] = None
    array: Optional[list[Any]] = None


class TitleField(_Payload):
    type: Literal["title"] = "title"
    title: Optional[list[RichTextRun]] = None


class RichTextField(_Payload):
    type: Literal["rich_text"] = "rich_text"
    rich_text: Optional[list[RichTextRun]] = None


class NumberField(_Payload):
    type: Literal["number"] = "number"
    number: Optional[Number] = None


class SelectField(_Payload):
    type: Literal["select"] = "select"
    select: Optional[NamedOption] = None


class StatusField(_Payload):
    type: Literal["status"] = "status"
    status: Optional[NamedOption] = None


class MultiSelectField(_Payload):
    type: Literal["multi_select"] = "multi_select"
    multi_select: Optional[list[NamedOption]] = None


class CheckboxField(_Payload):
    type: Literal["checkbox"] = "checkbox"
    checkbox: Optional[StrictBool] = None


class DateField(_Payload):
    type: Literal["date"] = "date"
    date: Optional[DateRange] = None


class UrlField(_Payload):
    type: Literal["url"] = "url"
    url: Optional[str] = None


class PeopleField(_Payload):
    type: Literal["people"] = "people"
    people: Optional[list[NamedOption]] = None


class FormulaField(_Payload):
    type: Literal["formula"] = "formula"
    formula: Optional[FormulaResult] = None


class RollupField(_Payload):
    type: Literal["rollup"] = "rollup"
    rollup: Optional[RollupResult] = None


class UnknownField(_Payload):
    """Fallback for unrecognized tags and malformed payloads."""

    model_config = ConfigDict(extra="allow")
    type: Any = None


_KNOWN_TAGS = frozenset(t.value for t in FieldType)


def _field_tag(value: Any) -> str:
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    return tag if isinstance(tag, str) and tag in _KNOWN_TAGS else "unknown"


FieldValue = Annotated[
    Union[
        Annotated[TitleField, Tag("title")],
        Annotated[RichTextField, Tag("rich_text")],
        Annotated[NumberField, Tag("number")],
        Annotated[SelectField, Tag("select")],
        Annotated[StatusField, Tag("status")],
        Annotated[MultiSelectField, Tag("multi_select")],
        Annotated[CheckboxField, Tag("checkbox")],
        Annotated[DateField, Tag("date")],
        Annotated[UrlField, Tag("url")],
        Annotated[PeopleField, Tag("people")],
        Annotated[FormulaField, Tag("formula")],
        Annotated[RollupField, Tag("rollup")],
        Annotated[UnknownField, Tag("unknown")],
    ],
    Discriminator(_field_tag),
]

_FIELD_ADAPTER: TypeAdapter[Any] = TypeAdapter(FieldValue)


def parse_field(raw: Any) -> Any:
    """Parse one raw property object into its tagged model; never raises."""
    if not isinstance(raw, dict):
        return UnknownField()
    try:
        return _FIELD_ADAPTER.validate_python(raw)
    except ValidationError:
        return UnknownField(type=raw.get("type"))


def field_type_of(raw: Any) -> Optional[str]:
    """Declared ``type`` tag of a raw property object, if it has one."""
    if isinstance(raw, dict) and isinstance(raw.get("type"), str):
        return raw["type"]
    return None


__all__ = [
    "FieldType",
    "FieldValue",
    "READ_ONLY_TYPES",
    "ENUMERABLE_TYPES",
    "TYPE_LABELS",
    "PILL_COLORS",
    "is_read_only",
    "type_label",
    "pill_colors",
    "parse_field",
    "field_type_of",
    "RichTextRun",
    "UnknownField",
]
