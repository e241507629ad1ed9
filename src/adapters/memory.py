"""In-process gateway holding a database schema and its pages.

Useful offline and in tests: it answers the same three calls as the proxy,
applies page updates to its own copy of the pages, and can be told to fail an
operation with a given status.
"""
from __future__ import annotations

import copy
import json
from datetime import datetime, timezone
from typing import Any, Optional

from parsers.decoder import decode_property
from parsers.numbers import parse_leading_float

from .base import GatewayResponse, RemoteGateway

OPERATIONS = ("get_schema", "query_records", "update_page")


def _error(status: int, code: str, message: str) -> GatewayResponse:
    return GatewayResponse(
        status=status,
        body=json.dumps({"object": "error", "status": status, "code": code, "message": message}),
    )


class InMemoryGateway(RemoteGateway):
    name = "memory"

    def __init__(
        self,
        pages: Optional[list[dict[str, Any]]] = None,
        schema: Optional[dict[str, Any]] = None,
        *,
        database_id: Optional[str] = None,
    ):
        super().__init__()
        self.database_id = database_id
        self.pages: list[dict[str, Any]] = copy.deepcopy(pages or [])
        self.schema: Optional[dict[str, Any]] = copy.deepcopy(schema)
        self.calls: list[tuple[str, Any]] = []
        self._failures: dict[str, tuple[int, str]] = {}

    def fail(self, operation: str, status: int = 500, body: str = "") -> None:
        """Make every later call of ``operation`` answer ``status``/``body``."""
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown gateway operation: {operation}")
        self._failures[operation] = (status, body)

    def recover(self, operation: Optional[str] = None) -> None:
        if operation is None:
            self._failures.clear()
        else:
            self._failures.pop(operation, None)

    # ----------------- Gateway API -----------------
    def get_schema(self, database_id: str) -> GatewayResponse:
        self.calls.append(("get_schema", database_id))
        failure = self._failure("get_schema")
        if failure:
            return failure
        if not self._knows(database_id) or self.schema is None:
            return _error(404, "object_not_found", f"Could not find database with ID: {database_id}.")
        return GatewayResponse(status=200, body=json.dumps(self.schema))

    def query_records(self, database_id: str, sorts: Optional[list[dict[str, str]]] = None) -> GatewayResponse:
        self.calls.append(("query_records", {"database_id": database_id, "sorts": sorts}))
        failure = self._failure("query_records")
        if failure:
            return failure
        if not self._knows(database_id):
            return _error(404, "object_not_found", f"Could not find database with ID: {database_id}.")
        results = list(self.pages)
        for directive in reversed(sorts or []):
            results = self._sorted(results, directive)
        payload = {"object": "list", "results": results, "next_cursor": None, "has_more": False}
        return GatewayResponse(status=200, body=json.dumps(payload))

    def update_page(self, record_id: str, properties: dict[str, Any]) -> GatewayResponse:
        self.calls.append(("update_page", {"record_id": record_id, "properties": properties}))
        failure = self._failure("update_page")
        if failure:
            return failure
        page = next((p for p in self.pages if p.get("id") == record_id), None)
        if page is None:
            return _error(404, "object_not_found", f"Could not find page with ID: {record_id}.")
        for name, value in properties.items():
            if name not in page.get("properties", {}):
                return _error(400, "validation_error", f"{name} is not a property that exists.")
            page["properties"][name] = copy.deepcopy(value)
        page["last_edited_time"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.000Z")
        return GatewayResponse(status=200, body=json.dumps(page))

    # ----------------- Helpers -----------------
    def _failure(self, operation: str) -> Optional[GatewayResponse]:
        if operation not in self._failures:
            return None
        status, body = self._failures[operation]
        self._log.warning("injected_failure", extra={"operation": operation, "status": status})
        return GatewayResponse(status=status, body=body)

    def _knows(self, database_id: str) -> bool:
        return self.database_id is None or database_id == self.database_id

    @staticmethod
    def _sorted(pages: list[dict[str, Any]], directive: dict[str, str]) -> list[dict[str, Any]]:
        descending = directive.get("direction") == "descending"
        if "timestamp" in directive:
            stamp = directive["timestamp"]
            return sorted(pages, key=lambda p: p.get(stamp) or "", reverse=descending)
        name = directive.get("property", "")

        def sort_value(page: dict[str, Any]):
            raw = page.get("properties", {}).get(name)
            text = decode_property(raw)
            if isinstance(raw, dict) and raw.get("type") == "number":
                number = parse_leading_float(text)
                return (0, number) if number is not None else (1, 0.0)
            return (0, text.lower())

        return sorted(pages, key=sort_value, reverse=descending)


__all__ = ["InMemoryGateway", "OPERATIONS"]
