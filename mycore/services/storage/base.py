"""
Storage interface - the capabilities the store needs from any backend
Rows are plain dicts keyed by column name; every row has an "id".
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

# Tables used by the store
PROFILES = "profiles"
HABITS = "habits"
HABIT_INSTANCES = "habit_instances"
TASKS = "tasks"
PROJECTS = "projects"
# Local login accounts, keyed by normalized email; not part of a user's data
ACCOUNTS = "accounts"

ALL_TABLES = (PROFILES, HABITS, HABIT_INSTANCES, TASKS, PROJECTS)


class Storage(ABC):
    """
    Abstract persistence backend

    Implementations must support point lookup and upsert by id,
    equality filters on any column, and set-membership filters.
    """

    #: Local backends wipe durable data on reset; networked ones keep it
    purges_on_reset: bool = True

    @abstractmethod
    def get(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        """Get a row by id, or None"""

    @abstractmethod
    def upsert(self, table: str, rows: List[Dict[str, Any]]) -> None:
        """Insert rows, replacing any row with the same id"""

    @abstractmethod
    def update(self, table: str, row_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge fields into an existing row; no-op returning None if missing"""

    @abstractmethod
    def delete(self, table: str, row_id: str) -> None:
        """Delete a row by id; missing rows are ignored"""

    @abstractmethod
    def select(self, table: str, **filters: Any) -> List[Dict[str, Any]]:
        """Rows whose columns equal every filter value"""

    @abstractmethod
    def select_in(self, table: str, field: str, values: Iterable[Any],
                  **filters: Any) -> List[Dict[str, Any]]:
        """Rows whose field is one of values, plus equality filters"""

    @abstractmethod
    def delete_where(self, table: str, **filters: Any) -> None:
        """Delete every row matching the equality filters"""

    def put(self, table: str, row: Dict[str, Any]) -> None:
        self.upsert(table, [row])
