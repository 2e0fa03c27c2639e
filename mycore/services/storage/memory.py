"""
In-process storage backend
"""
import copy
import logging
import threading
from typing import Any, Dict, Iterable, List, Optional

from .base import Storage, ALL_TABLES

logger = logging.getLogger(__name__)


def _matches(row: Dict[str, Any], filters: Dict[str, Any]) -> bool:
    return all(row.get(k) == v for k, v in filters.items())


class MemoryStorage(Storage):
    """
    Dict-of-tables backend; rows are copied in and out

    Every read and write holds one re-entrant lock, so the reminder job
    thread and request handlers can share an instance. Subclass write
    hooks run under the same lock.
    """

    purges_on_reset = True

    def __init__(self, tables: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self._lock = threading.RLock()
        self._set_tables(tables)

    def _set_tables(self, tables: Optional[Dict[str, Dict[str, Dict[str, Any]]]]) -> None:
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {t: {} for t in ALL_TABLES}
        if tables:
            for name, rows in tables.items():
                self.tables[name] = rows

    def _table(self, table: str) -> Dict[str, Dict[str, Any]]:
        return self.tables.setdefault(table, {})

    def _changed(self) -> None:
        """Hook for subclasses that persist after every write"""

    def get(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._table(table).get(row_id)
            return copy.deepcopy(row) if row is not None else None

    def upsert(self, table: str, rows: List[Dict[str, Any]]) -> None:
        if not rows:
            return
        with self._lock:
            store = self._table(table)
            for row in rows:
                store[row["id"]] = copy.deepcopy(row)
            self._changed()

    def update(self, table: str, row_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            row = self._table(table).get(row_id)
            if row is None:
                return None
            row.update(copy.deepcopy(data))
            self._changed()
            return copy.deepcopy(row)

    def delete(self, table: str, row_id: str) -> None:
        with self._lock:
            if self._table(table).pop(row_id, None) is not None:
                self._changed()

    def select(self, table: str, **filters: Any) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._table(table).values() if _matches(r, filters)]

    def select_in(self, table: str, field: str, values: Iterable[Any],
                  **filters: Any) -> List[Dict[str, Any]]:
        wanted = set(values)
        with self._lock:
            return [
                copy.deepcopy(r) for r in self._table(table).values()
                if r.get(field) in wanted and _matches(r, filters)
            ]

    def delete_where(self, table: str, **filters: Any) -> None:
        with self._lock:
            store = self._table(table)
            doomed = [row_id for row_id, row in store.items() if _matches(row, filters)]
            for row_id in doomed:
                del store[row_id]
            if doomed:
                logger.info(f"[STORAGE] Deleted {len(doomed)} row(s) from {table}")
                self._changed()
