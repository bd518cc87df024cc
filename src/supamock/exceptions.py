"""
Supamock - Custom Exceptions.

Errors produced by the emulator. Consumer-facing calls never raise these:
they are returned in the ``error`` field of a QueryResponse. Only the
configuration surface raises, and only for unknown operation kinds.
"""

from typing import Any


class SupamockException(Exception):
    """Base exception for the emulator."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SupamockException):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))


class NotMockedError(SupamockException):
    """Raised (returned) when a name has no configuration at all."""

    def __init__(self, message: str, kind: str | None = None, name: str | None = None):
        details = {"kind": kind, "name": name} if kind else None
        super().__init__(
            code="NOT_MOCKED",
            message=message,
            details=details,
        )


class RpcNotMockedError(NotMockedError):
    """Returned by rpc() for an unregistered function name."""

    def __init__(self, fn_name: str):
        super().__init__(f"RPC function {fn_name} not mocked", kind="rpc", name=fn_name)


class AuthNotMockedError(NotMockedError):
    """Returned by auth flows the emulator does not support."""

    def __init__(self, method: str):
        super().__init__(f"Auth method {method} not mocked", kind="auth", name=method)


class TableOperationError(SupamockException):
    """Convenience error for standing table+operation failures."""

    def __init__(self, message: str = "Network error", table: str | None = None, operation: str | None = None):
        details = {}
        if table:
            details["table"] = table
        if operation:
            details["operation"] = operation
        super().__init__(
            code="TABLE_ERROR",
            message=message,
            details=details if details else None,
        )


class InvalidOperationError(SupamockException):
    """Raised by configuration helpers for an unknown operation kind."""

    def __init__(self, operation: str, allowed: list[str]):
        super().__init__(
            code="INVALID_OPERATION",
            message=f"Unknown operation '{operation}'",
            details={"operation": operation, "allowed": allowed},
        )
