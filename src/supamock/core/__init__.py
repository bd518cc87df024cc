"""
Supamock Core - data access pieces of the emulator.

Components:
- table_store: per-table rows and standing errors
- query_builder: fluent filter chain with deferred operations
- resolver: applies a finalized builder to the store
- rpc: canned remote procedure responses
- scheduler: virtual and asyncio-backed delayed callbacks
"""

from supamock.core.query_builder import QueryBuilder
from supamock.core.rpc import RpcRegistry
from supamock.core.scheduler import AsyncioScheduler, Scheduler, VirtualScheduler
from supamock.core.table_store import InMemoryTableStore, TableEntry

__all__ = [
    "QueryBuilder",
    "RpcRegistry",
    "Scheduler",
    "VirtualScheduler",
    "AsyncioScheduler",
    "InMemoryTableStore",
    "TableEntry",
]
