"""Wire models for gateway responses (database schema and record query)."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError


class _Wire(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SchemaOption(_Wire):
    name: Optional[str] = None
    color: Optional[str] = None


class OptionSet(_Wire):
    options: list[SchemaOption] = Field(default_factory=list)


class SchemaProperty(_Wire):
    type: Optional[str] = None
    select: Optional[OptionSet] = None
    status: Optional[OptionSet] = None

    def options_for(self, field_type: str) -> list[SchemaOption]:
        if field_type == "select" and self.select:
            return self.select.options
        if field_type == "status" and self.status:
            return self.status.options
        return []


class DatabaseSchema(_Wire):
    id: Optional[str] = None
    properties: dict[str, SchemaProperty] = Field(default_factory=dict)

    @classmethod
    def parse(cls, payload: Any) -> Optional["DatabaseSchema"]:
        """Schema from a decoded response body, or None when it is unusable."""
        if not isinstance(payload, dict):
            return None
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return None


class RemoteRecord(_Wire):
    id: str
    properties: dict[str, Any] = Field(default_factory=dict)
    created_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("created_time", "createdAt")
    )
    last_edited_time: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("last_edited_time", "lastEditedAt")
    )


class QueryResult(_Wire):
    results: list[Any] = Field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False


__all__ = [
    "SchemaOption",
    "OptionSet",
    "SchemaProperty",
    "DatabaseSchema",
    "RemoteRecord",
    "QueryResult",
]
