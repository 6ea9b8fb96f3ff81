"""
In-Memory Record Store

Table-keyed record storage backing the default search backend.
"""

import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)


class RecordStore:
    """Records grouped by table name, keyed by primary key."""

    def __init__(self, primary_key: str = "id"):
        self.primary_key = primary_key
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}

    def table(self, name: str) -> dict[str, dict[str, Any]]:
        """Get or create a table."""
        return self._tables.setdefault(name, {})

    def put(self, table: str, record: dict[str, Any]) -> None:
        """Insert or replace a record by primary key."""
        key = record.get(self.primary_key)
        if key is None:
            raise ValueError(f"Record is missing primary key '{self.primary_key}'")
        self.table(table)[str(key)] = copy.deepcopy(record)

    def put_many(self, table: str, records: list[dict[str, Any]]) -> int:
        for record in records:
            self.put(table, record)
        return len(records)

    def get(self, table: str, key: Any) -> dict[str, Any] | None:
        record = self.table(table).get(str(key))
        return copy.deepcopy(record) if record is not None else None

    def all(self, table: str) -> list[dict[str, Any]]:
        """Copies of every record in insertion order."""
        return [copy.deepcopy(r) for r in self.table(table).values()]

    def count(self, table: str) -> int:
        return len(self.table(table))

    def clear(self, table: str | None = None) -> None:
        """Drop one table's records, or every table."""
        if table is None:
            self._tables.clear()
        else:
            self._tables.pop(table, None)
        logger.debug(f"Cleared record store table={table or '*'}")


# Global instance
record_store = RecordStore()
