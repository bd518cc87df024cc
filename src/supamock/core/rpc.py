"""
Supamock Core - RPC Registry.

Canned responses for remote procedure calls, keyed by function name.
"""

from __future__ import annotations

import logging
from typing import Any

from supamock.exceptions import RpcNotMockedError
from supamock.schemas import QueryResponse, RpcMock

logger = logging.getLogger(__name__)


class RpcRegistry:
    """Canned responses for remote procedure calls, keyed by function name."""

    def __init__(self):
        self._functions: dict[str, RpcMock] = {}

    def register(self, name: str, response: Any = None, error: Any = None) -> None:
        self._functions[name] = RpcMock(response=response, error=error)

    def registered(self) -> list[str]:
        return list(self._functions)

    def call(self, name: str, params: dict[str, Any] | None = None) -> QueryResponse:
        """
        Resolve a call by name. Parameters are accepted and ignored.

        Unregistered names resolve with RpcNotMockedError instead of raising.
        """
        mock = self._functions.get(name)
        if mock is None:
            logger.info(f"[RPC] {name} called but not mocked")
            return QueryResponse(data=None, error=RpcNotMockedError(name))
        if mock.error is not None:
            return QueryResponse(data=None, error=mock.error)
        return QueryResponse(data=mock.response)
