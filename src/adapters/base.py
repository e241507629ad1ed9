"""Remote Data Gateway interface.

A gateway forwards three calls to the remote database and hands back the raw
status/body pair:
 - schema fetch for a database
 - record query (optionally with sort directives)
 - page property update

Gateways do not judge HTTP statuses; the sync layer decides what a non-2xx
means. Anything that prevents a response from arriving at all (DNS, refused
connection, timeout) is raised as `TransportError`.

The HTTP callable is injectable for deterministic tests.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from app_logging import get_logger


class HTTPClient(Protocol):
    def __call__(self, method: str, url: str, json: Any | None = None, headers: dict[str, str] | None = None, timeout: float | None = None) -> tuple[int, str]:  # noqa: D401,E501
        ...


@dataclass(frozen=True)
class GatewayResponse:
    status: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decoded body. Raises ValueError if the body is not JSON."""
        return json.loads(self.body) if self.body else None

    def diagnostic(self, limit: int = 100) -> str:
        return f"{self.status} {self.body[:limit]}"


class RemoteGateway(ABC):
    """Abstract gateway. Subclasses implement the three remote operations."""

    name: str = "base"

    def __init__(self) -> None:
        self._log = get_logger(f"notion_table_sync.adapters.{self.name}")

    @abstractmethod
    def get_schema(self, database_id: str) -> GatewayResponse:
        """Fetch the database object (its ``properties`` map carries option sets)."""

    @abstractmethod
    def query_records(self, database_id: str, sorts: Optional[list[dict[str, str]]] = None) -> GatewayResponse:
        """Query the database's pages; ``sorts`` holds remote sort directives."""

    @abstractmethod
    def update_page(self, record_id: str, properties: dict[str, Any]) -> GatewayResponse:
        """Patch one page's properties with typed update payloads."""


__all__ = ["RemoteGateway", "GatewayResponse", "HTTPClient"]
