"""
Supamock Core - Operation Resolver.

Applies a builder's pending operation to the Row Store when the builder is
finalized. Two paths exist: single-record (``single``/``maybe_single``) and
all-records (``execute``/``await``). A standing error for the operation
short-circuits both before any row is touched.

Rows are matched by identity, not by value: the builder's working set holds
the same dict objects as the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from supamock.core.table_store import TableEntry
from supamock.schemas import QueryResponse, Row

logger = logging.getLogger(__name__)


@dataclass
class PendingOperation:
    """Everything the resolver needs from a builder."""

    table: str
    entry: TableEntry
    operation: str
    working_set: list[Row]
    insert_payload: list[Row] = field(default_factory=list)
    update_patch: Row | None = None


def _index_of(rows: list[Row], row: Row) -> int:
    for index, candidate in enumerate(rows):
        if candidate is row:
            return index
    return -1


def _contains(rows: list[Row], row: Row) -> bool:
    return _index_of(rows, row) != -1


def _standing_error(pending: PendingOperation) -> QueryResponse | None:
    error = pending.entry.error_for(pending.operation)
    if error is None:
        return None
    logger.info(f"[TABLE] {pending.table}.{pending.operation} short-circuited by standing error: {error}")
    return QueryResponse(data=None, error=error)


def resolve_single(pending: PendingOperation) -> QueryResponse:
    """Resolve the single-record path."""
    failed = _standing_error(pending)
    if failed is not None:
        return failed

    store_rows = pending.entry.rows
    working_set = pending.working_set

    if pending.operation == "insert":
        if not pending.insert_payload:
            return QueryResponse(data=None)
        record = pending.insert_payload[0]
        store_rows.append(record)
        logger.debug(f"[TABLE] {pending.table}: inserted 1 row")
        return QueryResponse(data=record)

    if pending.operation == "update" and pending.update_patch is not None:
        for row in store_rows:
            if _contains(working_set, row):
                row.update(pending.update_patch)
                logger.debug(f"[TABLE] {pending.table}: updated 1 row")
                return QueryResponse(data=row)

    if pending.operation == "delete":
        target = working_set[0] if working_set else None
        if target is not None:
            index = _index_of(store_rows, target)
            if index != -1:
                del store_rows[index]
                logger.debug(f"[TABLE] {pending.table}: deleted 1 row")
        return QueryResponse(data=target)

    return QueryResponse(data=working_set[0] if working_set else None)


def resolve_all(pending: PendingOperation) -> QueryResponse:
    """Resolve the all-records path."""
    failed = _standing_error(pending)
    if failed is not None:
        return failed

    store_rows = pending.entry.rows
    working_set = pending.working_set

    if pending.operation == "insert":
        store_rows.extend(pending.insert_payload)
        logger.debug(f"[TABLE] {pending.table}: inserted {len(pending.insert_payload)} row(s)")
        return QueryResponse(data=list(pending.insert_payload))

    if pending.operation == "update" and pending.update_patch is not None:
        for row in working_set:
            if _contains(store_rows, row):
                row.update(pending.update_patch)
        logger.debug(f"[TABLE] {pending.table}: updated {len(working_set)} row(s)")
        return QueryResponse(data=list(working_set))

    if pending.operation == "delete":
        for row in working_set:
            index = _index_of(store_rows, row)
            if index != -1:
                del store_rows[index]
        logger.debug(f"[TABLE] {pending.table}: deleted {len(working_set)} row(s)")
        return QueryResponse(data=list(working_set))

    return QueryResponse(data=list(working_set))
