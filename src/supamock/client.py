"""
Supamock - Emulated Supabase client.

Composes the row store, RPC registry, auth emulator and realtime registry
behind the entry points application code calls (``table``/``from_``,
``rpc``, ``channel``, ``auth``) plus a configuration surface for test setup.

Each emulator owns its registries; nothing is shared between instances.
"""

from __future__ import annotations

import logging
from typing import Any

from supamock.auth import AuthClient, AuthState
from supamock.config import EmulatorSettings, get_settings
from supamock.core.query_builder import QueryBuilder
from supamock.core.rpc import RpcRegistry
from supamock.core.scheduler import Scheduler, VirtualScheduler
from supamock.core.table_store import InMemoryTableStore, TableEntry
from supamock.realtime import RealtimeChannel, RealtimeRegistry
from supamock.schemas import AuthStateChange, QueryResponse, Row

logger = logging.getLogger(__name__)


class SupabaseEmulator:
    """In-memory stand-in for the remote data client."""

    def __init__(
        self,
        settings: EmulatorSettings | None = None,
        scheduler: Scheduler | None = None,
        tables: dict[str, list[Row]] | None = None,
        rpcs: dict[str, Any] | None = None,
    ):
        self.settings = settings or get_settings()
        self.scheduler: Scheduler = scheduler or VirtualScheduler()
        self.store = InMemoryTableStore()
        self.rpcs = RpcRegistry()
        self.auth_state = AuthState()
        self.realtime = RealtimeRegistry(default_delay_ms=self.settings.realtime_default_delay_ms)
        self._auth = AuthClient(
            self.auth_state,
            self.scheduler,
            replay_delay_ms=self.settings.auth_replay_delay_ms,
        )

        for name, rows in (tables or {}).items():
            self.set_table_data(name, rows)
        for name, response in (rpcs or {}).items():
            self.register_rpc(name, response)

    # -------------------------------------------------------------------------
    # Client surface
    # -------------------------------------------------------------------------

    def table(self, name: str) -> QueryBuilder:
        if self.settings.create_missing_tables:
            entry = self.store.get(name)
        else:
            entry = self.store.peek(name) or TableEntry()
        return QueryBuilder(name, entry)

    def from_(self, name: str) -> QueryBuilder:
        return self.table(name)

    async def rpc(self, fn_name: str, params: dict[str, Any] | None = None) -> QueryResponse:
        return self.rpcs.call(fn_name, params)

    def channel(self, name: str) -> RealtimeChannel:
        return RealtimeChannel(name, self.realtime, self.scheduler)

    @property
    def auth(self) -> AuthClient:
        return self._auth

    # -------------------------------------------------------------------------
    # Configuration surface
    # -------------------------------------------------------------------------

    def set_table_data(self, table: str, rows: list[Row]) -> None:
        self.store.set_data(table, rows)

    def set_table_error(self, table: str, operation: str, error: Any) -> None:
        self.store.set_error(table, operation, error)
        logger.debug(f"[TABLE] {table}.{operation}: standing error set to {error!r}")

    def clear_table_error(self, table: str, operation: str) -> None:
        self.store.clear_error(table, operation)

    def register_rpc(self, fn_name: str, response: Any = None, error: Any = None) -> None:
        self.rpcs.register(fn_name, response, error)

    def set_auth_user(self, user: Any, session: Any) -> None:
        # Silent write: subscribers are not notified.
        self.auth_state.user = user
        self.auth_state.session = session

    def set_auth_error(self, error: Any) -> None:
        self.auth_state.error = error

    def add_auth_state_change(self, event: str, session: Any = None) -> None:
        self.auth_state.state_changes.append(AuthStateChange(event=event, session=session))

    def add_realtime_event(
        self,
        channel: str,
        event: str,
        payload: Any = None,
        delay_ms: int | None = None,
    ) -> None:
        self.realtime.add_event(channel, event, payload, delay_ms)


def create_client(
    settings: EmulatorSettings | None = None,
    scheduler: Scheduler | None = None,
    tables: dict[str, list[Row]] | None = None,
    rpcs: dict[str, Any] | None = None,
) -> SupabaseEmulator:
    """
    Create a fresh emulator.

    Not cached: every call returns an instance with its own registries.
    """
    return SupabaseEmulator(settings=settings, scheduler=scheduler, tables=tables, rpcs=rpcs)
