"""
File-backed local storage: the in-process backend, written to a JSON
file after every change
"""
import json
import logging
import os
from typing import Any, Dict

from mycore.core.exceptions import DatabaseError
from .memory import MemoryStorage

logger = logging.getLogger(__name__)


class JsonFileStorage(MemoryStorage):
    """Local single-file backend"""

    purges_on_reset = True

    def __init__(self, path: str):
        self.path = path
        super().__init__(self._load())

    def _load(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"[STORAGE] Could not read {self.path}: {e}")
            raise DatabaseError(f"Failed to load storage file: {e}")
        logger.info(f"[STORAGE] Loaded {self.path}")
        return data

    def _changed(self) -> None:
        """
        Write every table to disk, replacing the file atomically

        On failure the in-memory tables are reloaded from the file, which
        still holds the last successful write, so memory and disk agree.
        """
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.tables, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"[STORAGE] Could not write {self.path}: {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            self._set_tables(self._load())
            raise DatabaseError(f"Failed to write storage file: {e}")
