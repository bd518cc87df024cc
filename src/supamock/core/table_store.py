"""
Supamock Core - Row Store.

Per-table rows and standing errors keyed by operation kind. Entries are
created on first reference; a missing table reads as empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from supamock.exceptions import InvalidOperationError
from supamock.schemas import OPERATIONS, Row

logger = logging.getLogger(__name__)


@dataclass
class TableEntry:
    rows: list[Row] = field(default_factory=list)
    errors: dict[str, Any] = field(default_factory=dict)
    # Reserved; nothing reads it yet.
    predicates: list[Any] = field(default_factory=list)

    def error_for(self, operation: str) -> Any:
        return self.errors.get(operation)


class InMemoryTableStore:
    def __init__(self):
        self._tables: dict[str, TableEntry] = {}

    def get(self, table: str) -> TableEntry:
        entry = self._tables.get(table)
        if entry is None:
            entry = TableEntry()
            self._tables[table] = entry
        return entry

    def peek(self, table: str) -> TableEntry | None:
        return self._tables.get(table)

    def set_data(self, table: str, rows: list[Row]) -> None:
        self.get(table).rows = list(rows)
        logger.debug(f"[TABLE] {table}: loaded {len(rows)} row(s)")

    def set_error(self, table: str, operation: str, error: Any) -> None:
        if operation not in OPERATIONS:
            raise InvalidOperationError(operation, list(OPERATIONS))
        entry = self.get(table)
        if error is None:
            entry.errors.pop(operation, None)
        else:
            entry.errors[operation] = error

    def clear_error(self, table: str, operation: str) -> None:
        self.set_error(table, operation, None)

    def rows(self, table: str) -> list[Row]:
        entry = self._tables.get(table)
        return entry.rows if entry else []

    def tables(self) -> list[str]:
        return list(self._tables)

    def clear(self) -> None:
        self._tables.clear()
