"""Sync orchestration between the remote database and the local table state.

Two operations change state:
- full sync: schema fetch + record query issued concurrently, decoded into
  columns/rows and swapped into the state together
- cell update: one edited value mapped to a typed payload, sent, and mirrored
  into the matching row only after the remote confirmed it

Every failure is recorded on the state (``error``) and on ``last_error``; the
prior columns, rows and cell values stay as they were.
"""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError

from adapters.base import GatewayResponse, RemoteGateway
from config import _Settings, get_settings
from exceptions import RemoteError, SyncError, TransportError
from models.fields import is_read_only
from models.remote import DatabaseSchema, QueryResult, RemoteRecord
from models.table import EditingCell, TableState, ViewParams
from parsers.columns import infer_columns, merge_schema_options
from parsers.decoder import decode_record
from parsers.writeback import build_update
from views.deriver import DerivedView, derive_view

logger = logging.getLogger(__name__)


def _as_sync_error(error: BaseException) -> BaseException:
    """Gateway failures that are not SyncErrors become TransportErrors.

    Non-Exception BaseExceptions (cancellation, KeyboardInterrupt) pass through.
    """
    if isinstance(error, SyncError) or not isinstance(error, Exception):
        return error
    logger.error(f"Gateway raised {type(error).__name__}: {error}")
    return TransportError(str(error))


class TableSync:
    """Owns the table state and runs syncs and cell updates against a gateway.

    Attributes:
        gateway: Remote Data Gateway used for all remote calls
        settings: Proxy URL / database id / timeout
        state: Current columns, rows, view params, editing cell, sync time, error
        last_error: The most recent recorded failure, if any
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        settings: Optional[_Settings] = None,
        state: Optional[TableState] = None,
    ):
        self.gateway = gateway
        self.settings = settings or get_settings()
        self.state = state or TableState()
        self.last_error: Optional[SyncError] = None

    # ----------------- View -----------------
    def view(self) -> DerivedView:
        return derive_view(self.state.columns, self.state.rows, self.state.view)

    def set_view(self, **changes: Any) -> ViewParams:
        self.state.view = replace(self.state.view, **changes)
        return self.state.view

    def set_sort_option(self, option: str) -> ViewParams:
        self.state.view = self.state.view.with_sort_option(option)
        return self.state.view

    def build_sorts(self) -> list[dict[str, str]]:
        """Remote sort directives for the current sort key (at most one)."""
        params = self.state.view
        if not params.sort_key:
            return []
        direction = "descending" if params.descending else "ascending"
        if params.timestamp_sort:
            return [{"timestamp": params.timestamp_sort, "direction": direction}]
        return [{"property": params.sort_key, "direction": direction}]

    # ----------------- Full sync -----------------
    async def full_sync(self) -> bool:
        """Refresh columns and rows from the remote database.

        Returns:
            True when the state was replaced, False when a failure was recorded
        """
        try:
            self.settings.require()
            database_id = self.settings.normalized_database_id
            self.state.error = ""
            schema_res, query_res = await self._fetch(database_id)
            if not query_res.ok:
                raise RemoteError(query_res.status, query_res.body)
            records = self._parse_records(query_res)
            schema = self._parse_schema(schema_res)
        except SyncError as e:
            return self._record_failure("full_sync", e)

        columns = merge_schema_options(infer_columns(records), schema)
        rows = [decode_record(record, columns) for record in records]
        if not records:
            logger.warning(f"Database {database_id} returned no records; no columns derived")

        self.state.columns, self.state.rows, self.state.last_synced, self.state.error = (
            columns,
            rows,
            datetime.now(timezone.utc).isoformat(),
            "",
        )
        self.last_error = None
        logger.info(f"Synced {len(rows)} rows, {len(columns)} columns from {database_id}")
        return True

    async def _fetch(self, database_id: str) -> tuple[GatewayResponse, GatewayResponse]:
        sorts = self.build_sorts()
        # both calls settle before either result is looked at
        schema_res, query_res = await asyncio.gather(
            asyncio.to_thread(self.gateway.get_schema, database_id),
            asyncio.to_thread(self.gateway.query_records, database_id, sorts or None),
            return_exceptions=True,
        )
        for result in (query_res, schema_res):
            if isinstance(result, BaseException):
                raise _as_sync_error(result)
        return schema_res, query_res

    async def _send_update(self, record_id: str, payload: dict[str, Any]) -> GatewayResponse:
        try:
            return await asyncio.to_thread(self.gateway.update_page, record_id, payload)
        except SyncError:
            raise
        except Exception as e:  # broad catch to wrap gateway errors
            raise _as_sync_error(e) from e

    def _parse_records(self, response: GatewayResponse) -> list[RemoteRecord]:
        try:
            result = QueryResult.model_validate(response.json() or {})
        except (ValueError, ValidationError) as e:
            logger.error(f"Unreadable query response: {e}")
            raise RemoteError(response.status, response.body) from e
        records = []
        for raw in result.results:
            try:
                records.append(RemoteRecord.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping record without an id in query results")
        return records

    def _parse_schema(self, response: GatewayResponse) -> Optional[DatabaseSchema]:
        if not response.ok:
            logger.warning(f"Schema fetch failed ({response.diagnostic()}); continuing without options")
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Schema response is not JSON; continuing without options")
            return None
        return DatabaseSchema.parse(payload)

    # ----------------- Cell editing -----------------
    def begin_edit(
        self,
        record_id: str,
        property_name: str,
        value: Optional[str] = None,
        field_type: Optional[str] = None,
    ) -> Optional[EditingCell]:
        """Start editing one cell, replacing any unsaved edit.

        Read-only columns (formula, rollup, people) cannot be edited; None is returned.
        """
        col = self.state.column(property_name)
        effective_type = field_type or (col.type if col else None)
        if is_read_only(effective_type):
            logger.info(f"Ignoring edit of read-only {effective_type} property {property_name}")
            return None
        if value is None:
            row = self.state.row(record_id)
            value = row.cells.get(property_name, "") if row else ""
        self.state.editing = EditingCell(
            record_id=record_id,
            property_name=property_name,
            type=effective_type,
            value=value,
        )
        return self.state.editing

    def cancel_edit(self) -> None:
        self.state.editing = None

    async def save_edit(self, new_value: str) -> bool:
        """Write the active edit to the remote page, then mirror it locally.

        Returns:
            True when the remote accepted the update and the row was patched
        """
        cell = self.state.editing
        if cell is None:
            logger.warning("save_edit called with no active edit")
            return False
        self.state.editing = None

        col = self.state.column(cell.property_name)
        field_type = cell.type or (col.type if col else None) or "rich_text"
        try:
            if is_read_only(field_type):
                raise SyncError(f"{cell.property_name} is read-only")
            payload = build_update(cell.property_name, field_type, new_value)
            response = await self._send_update(cell.record_id, payload)
            if not response.ok:
                raise RemoteError(
                    response.status,
                    response.body,
                    prefix="Update failed",
                    limit=80,
                    explain_not_found=False,
                )
        except SyncError as e:
            return self._record_failure("save_edit", e)

        self.state.rows = [
            row.with_cell(cell.property_name, new_value) if row.record_id == cell.record_id else row
            for row in self.state.rows
        ]
        self.state.error = ""
        self.last_error = None
        logger.info(f"Updated {cell.property_name} on {cell.record_id}")
        return True

    async def update_cell(self, record_id: str, property_name: str, new_value: str) -> bool:
        """begin_edit + save_edit in one call."""
        if self.begin_edit(record_id, property_name) is None:
            return self._record_failure("update_cell", SyncError(f"{property_name} is read-only"))
        return await self.save_edit(new_value)

    def _record_failure(self, operation: str, error: SyncError) -> bool:
        self.last_error = error
        self.state.error = error.message
        logger.warning(f"{operation} failed ({error.kind}): {error.message}")
        return False


__all__ = ["TableSync"]
