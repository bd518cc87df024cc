"""Supamock Auth Module.

Session-based auth state with sign-out fan-out and scripted replay to
subscribers.
"""

from supamock.auth.emulator import AuthClient, Subscription
from supamock.auth.schemas import AuthState

__all__ = [
    "AuthClient",
    "AuthState",
    "Subscription",
]
