"""
Supabase storage backend - all PostgREST queries go through here
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from mycore.core.exceptions import DatabaseError
from .base import Storage

logger = logging.getLogger(__name__)


class SupabaseStorage(Storage):
    """
    Networked backend over a supabase-py Client

    Row-level security on the project scopes rows to the signed-in user;
    the store also filters by user_id explicitly.
    """

    purges_on_reset = False

    def __init__(self, client):
        self.client = client

    def _eq(self, query, filters: Dict[str, Any]):
        for field, value in filters.items():
            query = query.eq(field, value)
        return query

    def get(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.client.table(table).select("*").eq("id", row_id).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"[STORAGE] Error fetching {table}/{row_id}: {e}")
            raise DatabaseError(f"Failed to fetch from {table}: {e}")

    def upsert(self, table: str, rows: List[Dict[str, Any]]) -> None:
        if not rows:
            return
        try:
            self.client.table(table).upsert(rows, on_conflict="id").execute()
        except Exception as e:
            logger.error(f"[STORAGE] Error upserting {len(rows)} row(s) into {table}: {e}")
            raise DatabaseError(f"Failed to write to {table}: {e}")

    def update(self, table: str, row_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            result = self.client.table(table).update(data).eq("id", row_id).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"[STORAGE] Error updating {table}/{row_id}: {e}")
            raise DatabaseError(f"Failed to update {table}: {e}")

    def delete(self, table: str, row_id: str) -> None:
        try:
            self.client.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            logger.error(f"[STORAGE] Error deleting {table}/{row_id}: {e}")
            raise DatabaseError(f"Failed to delete from {table}: {e}")

    def select(self, table: str, **filters: Any) -> List[Dict[str, Any]]:
        try:
            query = self._eq(self.client.table(table).select("*"), filters)
            return query.execute().data
        except Exception as e:
            logger.error(f"[STORAGE] Error querying {table} {filters}: {e}")
            raise DatabaseError(f"Failed to query {table}: {e}")

    def select_in(self, table: str, field: str, values: Iterable[Any],
                  **filters: Any) -> List[Dict[str, Any]]:
        values = list(values)
        if not values:
            return []
        try:
            query = self._eq(self.client.table(table).select("*").in_(field, values), filters)
            return query.execute().data
        except Exception as e:
            logger.error(f"[STORAGE] Error querying {table} where {field} in {len(values)} value(s): {e}")
            raise DatabaseError(f"Failed to query {table}: {e}")

    def delete_where(self, table: str, **filters: Any) -> None:
        if not filters:
            raise DatabaseError(f"Refusing unfiltered delete on {table}")
        try:
            self._eq(self.client.table(table).delete(), filters).execute()
        except Exception as e:
            logger.error(f"[STORAGE] Error deleting from {table} {filters}: {e}")
            raise DatabaseError(f"Failed to delete from {table}: {e}")
