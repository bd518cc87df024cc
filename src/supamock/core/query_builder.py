"""
Supamock Core - Query Builder.

Fluent, stateful builder returned by ``table(name)``. Filter calls narrow
the builder's working set immediately; operation calls only record what
should happen. Nothing reaches the Row Store until a finalizer runs:

    await client.table("profiles").update({"role": "admin"}).eq("id", 1)
    await client.table("profiles").select("*").eq("id", 1).single()

The working set is a copy of the table's row list taken when the builder is
created. Rows inserted or deleted afterwards by other builders are not seen.
"""

from __future__ import annotations

import functools
import re
from typing import Any, Callable, Generator

from supamock.core.resolver import PendingOperation, resolve_all, resolve_single
from supamock.core.table_store import TableEntry
from supamock.schemas import Operation, QueryResponse, Row

_MISSING = object()


def _compare(op: Callable[[Any, Any], bool], left: Any, right: Any) -> bool:
    if left is _MISSING or left is None:
        return False
    try:
        return bool(op(left, right))
    except TypeError:
        return False


def _strict_equal(left: Any, right: Any) -> bool:
    if left is _MISSING:
        return False
    if left is None or right is None or isinstance(left, bool) or isinstance(right, bool):
        return left is right
    return left == right


def _like_regex(pattern: str, ignore_case: bool) -> re.Pattern[str]:
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE if ignore_case else 0)


def _order_key(column: str, desc: bool) -> Callable[[Row], Any]:
    def cmp(a: Row, b: Row) -> int:
        left, right = a.get(column), b.get(column)
        try:
            if left > right:
                result = 1
            elif left < right:
                result = -1
            else:
                result = 0
        except TypeError:
            return 0
        return -result if desc else result

    return functools.cmp_to_key(cmp)


class QueryBuilder:
    """Chainable query against one table snapshot."""

    def __init__(self, table: str, entry: TableEntry):
        self.table = table
        self._entry = entry
        self.operation: Operation = "select"
        self.working_set: list[Row] = list(entry.rows)
        self.insert_payload: list[Row] = []
        self.update_patch: Row | None = None
        self.columns = "*"

    def __repr__(self) -> str:
        return f"QueryBuilder(table={self.table!r}, operation={self.operation!r}, rows={len(self.working_set)})"

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def select(self, columns: str = "*", **_options: Any) -> QueryBuilder:
        # Column lists are accepted for call-shape compatibility only.
        self.operation = "select"
        self.columns = columns
        return self

    def insert(self, payload: Row | list[Row], **_options: Any) -> QueryBuilder:
        self.operation = "insert"
        self.insert_payload = list(payload) if isinstance(payload, list) else [payload]
        return self

    def update(self, patch: Row, **_options: Any) -> QueryBuilder:
        self.operation = "update"
        self.update_patch = patch
        return self

    def delete(self, **_options: Any) -> QueryBuilder:
        self.operation = "delete"
        return self

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    def _filter(self, predicate: Callable[[Row], bool]) -> QueryBuilder:
        self.working_set = [row for row in self.working_set if predicate(row)]
        return self

    def eq(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: _strict_equal(row.get(column, _MISSING), value))

    def neq(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: not _strict_equal(row.get(column, _MISSING), value))

    def gt(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: _compare(lambda a, b: a > b, row.get(column, _MISSING), value))

    def gte(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: _compare(lambda a, b: a >= b, row.get(column, _MISSING), value))

    def lt(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: _compare(lambda a, b: a < b, row.get(column, _MISSING), value))

    def lte(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: _compare(lambda a, b: a <= b, row.get(column, _MISSING), value))

    def like(self, column: str, pattern: str) -> QueryBuilder:
        if not isinstance(pattern, str):
            return self._filter(lambda row: False)
        regex = _like_regex(pattern, ignore_case=False)
        return self._filter(lambda row: isinstance(row.get(column), str) and regex.search(row[column]) is not None)

    def ilike(self, column: str, pattern: str) -> QueryBuilder:
        if not isinstance(pattern, str):
            return self._filter(lambda row: False)
        regex = _like_regex(pattern, ignore_case=True)
        return self._filter(lambda row: isinstance(row.get(column), str) and regex.search(row[column]) is not None)

    def is_(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: _strict_equal(row.get(column, _MISSING), value))

    def in_(self, column: str, values: list[Any]) -> QueryBuilder:
        if not isinstance(values, (list, tuple, set)):
            return self._filter(lambda row: False)
        return self._filter(
            lambda row: any(_strict_equal(row.get(column, _MISSING), candidate) for candidate in values)
        )

    def contains(self, column: str, value: Any) -> QueryBuilder:
        return self._filter(lambda row: isinstance(row.get(column), list) and value in row[column])

    def contained_by(self, column: str, values: list[Any]) -> QueryBuilder:
        if not isinstance(values, list):
            return self._filter(lambda row: False)
        return self._filter(
            lambda row: isinstance(row.get(column), list) and all(item in values for item in row[column])
        )

    def order(self, column: str, desc: bool = False) -> QueryBuilder:
        self.working_set = sorted(self.working_set, key=_order_key(column, desc))
        return self

    def limit(self, count: int) -> QueryBuilder:
        if not isinstance(count, int) or isinstance(count, bool):
            return self
        self.working_set = self.working_set[: max(count, 0)]
        return self

    # -------------------------------------------------------------------------
    # Finalizers
    # -------------------------------------------------------------------------

    def _pending(self) -> PendingOperation:
        return PendingOperation(
            table=self.table,
            entry=self._entry,
            operation=self.operation,
            working_set=self.working_set,
            insert_payload=self.insert_payload,
            update_patch=self.update_patch,
        )

    async def single(self) -> QueryResponse:
        """Resolve against the first matching record."""
        return resolve_single(self._pending())

    async def maybe_single(self) -> QueryResponse:
        return await self.single()

    async def execute(self) -> QueryResponse:
        """Resolve against every matching record."""
        return resolve_all(self._pending())

    def __await__(self) -> Generator[Any, None, QueryResponse]:
        return self.execute().__await__()
