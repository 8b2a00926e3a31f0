"""
Base store — shared Supabase access for the inventory sync stores.

Every store inherits the select / insert / update / upsert primitives.
PostgREST failures surface as DatabaseTransientError so the Celery task
can retry the whole run.
"""

import logging
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from inventory_hub.clients.supabase_client import SupabaseClient
from inventory_hub.core.config import settings
from inventory_hub.core.exceptions import DatabaseTransientError

logger = logging.getLogger("base_store")


class BaseStore:
    """Base class for all Supabase stores providing shared CRUD operations."""

    def __init__(self, supabase_client: Optional[SupabaseClient] = None) -> None:
        self._supabase_client = supabase_client

    @property
    def _client(self) -> Client:
        if self._supabase_client is None:
            self._supabase_client = SupabaseClient(settings)
        return self._supabase_client.client

    @staticmethod
    def _wrap(action: str, table: str, error: APIError) -> DatabaseTransientError:
        logger.info("supabase error action=%s table=%s detail=%s", action, table, str(error))
        return DatabaseTransientError(f"Supabase {action} {table} failed: {error}")

    async def _select(
        self, table: str, columns: str = "*", filters: Dict[str, Any] | None = None
    ) -> List[Dict[str, Any]]:
        """Select rows from a table with optional equality filters."""
        try:
            query = self._client.table(table).select(columns)
            for key, value in (filters or {}).items():
                query = query.eq(key, value)
            response = query.execute()
            return response.data or []
        except APIError as e:
            raise self._wrap("select from", table, e)

    async def _insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        try:
            response = self._client.table(table).insert(row).execute()
        except APIError as e:
            raise self._wrap("insert into", table, e)
        return (response.data or [{}])[0]

    async def _update(
        self, table: str, filters: Dict[str, Any], payload: Dict[str, Any]
    ) -> None:
        """Update rows matching the equality filters."""
        try:
            query = self._client.table(table).update(payload)
            for key, value in filters.items():
                query = query.eq(key, value)
            query.execute()
        except APIError as e:
            raise self._wrap("update", table, e)

    async def _upsert(
        self, table: str, row: Dict[str, Any], on_conflict: str | None = None
    ) -> None:
        try:
            if on_conflict:
                self._client.table(table).upsert(row, on_conflict=on_conflict).execute()
            else:
                self._client.table(table).upsert(row).execute()
        except APIError as e:
            raise self._wrap("upsert into", table, e)
