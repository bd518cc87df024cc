"""
Supamock - Common Schemas.

Shared models used across the emulator: the response envelope returned by
every consumer-facing call and the records held by the configuration
registries.
"""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

Operation = Literal["select", "insert", "update", "delete"]
OPERATIONS: tuple[str, ...] = ("select", "insert", "update", "delete")

Row = dict[str, Any]


# =============================================================================
# Responses
# =============================================================================


@dataclass
class QueryResponse:
    """{data, error} pair returned by every consumer-facing call."""

    data: Any = None
    error: Any = None

    @property
    def count(self) -> int | None:
        if isinstance(self.data, list):
            return len(self.data)
        return None

    @property
    def ok(self) -> bool:
        return self.error is None


# =============================================================================
# Configuration records
# =============================================================================


class RpcMock(BaseModel):
    """Canned response for one remote procedure."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    response: Any = None
    error: Any = None


class AuthStateChange(BaseModel):
    """Scripted auth event replayed to each new subscriber."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    event: str
    session: Any = None


class RealtimeEvent(BaseModel):
    """Scripted realtime broadcast for one channel."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    event: str
    payload: Any = None
    delay_ms: int = 0
