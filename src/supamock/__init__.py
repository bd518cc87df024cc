"""
Supamock - in-memory emulator of the Supabase data client for tests.
"""

from supamock.client import SupabaseEmulator, create_client
from supamock.config import EmulatorSettings, configure_logging, get_settings
from supamock.core.scheduler import AsyncioScheduler, VirtualScheduler
from supamock.schemas import QueryResponse

__version__ = "0.1.0"

__all__ = [
    "SupabaseEmulator",
    "create_client",
    "EmulatorSettings",
    "configure_logging",
    "get_settings",
    "AsyncioScheduler",
    "VirtualScheduler",
    "QueryResponse",
]
