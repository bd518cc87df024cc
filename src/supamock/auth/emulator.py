"""
Supamock Auth - Auth client emulator.

Mirrors the auth surface of the remote client: session/user lookups,
sign-out, OTP sign-in and state-change subscriptions.

Every new subscriber gets the full list of scripted events replayed through
the scheduler, no matter how many subscribers came before it. Unsubscribing
removes the callback from the live list (so sign_out no longer reaches it)
but does not cancel replays that were already scheduled.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from supamock.auth.schemas import AuthState
from supamock.core.scheduler import Scheduler
from supamock.exceptions import AuthNotMockedError
from supamock.schemas import QueryResponse

logger = logging.getLogger(__name__)

AuthCallback = Callable[[str, Any], Any]


class Subscription:
    """Handle returned by on_auth_state_change."""

    def __init__(self, callback: AuthCallback, listeners: list[AuthCallback]):
        self.callback = callback
        self._listeners = listeners

    @property
    def active(self) -> bool:
        return any(listener is self.callback for listener in self._listeners)

    def unsubscribe(self) -> None:
        for index, listener in enumerate(self._listeners):
            if listener is self.callback:
                del self._listeners[index]
                return


class AuthClient:
    """Auth surface of the emulator. One instance per emulator."""

    def __init__(self, state: AuthState, scheduler: Scheduler, replay_delay_ms: int = 0):
        self._state = state
        self._scheduler = scheduler
        self._replay_delay_ms = replay_delay_ms
        self._listeners: list[AuthCallback] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def _record(self, method: str, **kwargs: Any) -> None:
        self.calls.append((method, kwargs))

    def calls_to(self, method: str) -> list[dict[str, Any]]:
        return [args for name, args in self.calls if name == method]

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def get_session(self) -> QueryResponse:
        self._record("get_session")
        return QueryResponse(data={"session": self._state.session}, error=self._state.error)

    async def get_user(self, jwt: str | None = None) -> QueryResponse:
        self._record("get_user", jwt=jwt)
        return QueryResponse(data={"user": self._state.user}, error=self._state.error)

    # -------------------------------------------------------------------------
    # Sign-in / sign-out
    # -------------------------------------------------------------------------

    async def sign_in_with_otp(self, credentials: dict[str, Any] | None = None, **kwargs: Any) -> QueryResponse:
        payload = {**(credentials or {}), **kwargs}
        self._record("sign_in_with_otp", **payload)
        if self._state.error is not None:
            return QueryResponse(data=None, error=self._state.error)
        return QueryResponse(data={"user": None, "session": None})

    async def sign_in_with_password(self, credentials: dict[str, Any] | None = None, **kwargs: Any) -> QueryResponse:
        return self._not_mocked("sign_in_with_password", {**(credentials or {}), **kwargs})

    async def sign_in_with_oauth(self, credentials: dict[str, Any] | None = None, **kwargs: Any) -> QueryResponse:
        return self._not_mocked("sign_in_with_oauth", {**(credentials or {}), **kwargs})

    async def sign_up(self, credentials: dict[str, Any] | None = None, **kwargs: Any) -> QueryResponse:
        return self._not_mocked("sign_up", {**(credentials or {}), **kwargs})

    def _not_mocked(self, method: str, payload: dict[str, Any]) -> QueryResponse:
        self._record(method, **payload)
        if self._state.error is not None:
            return QueryResponse(data=None, error=self._state.error)
        logger.info(f"[AUTH] {method} is not supported by the emulator")
        return QueryResponse(data=None, error=AuthNotMockedError(method))

    async def sign_out(self) -> QueryResponse:
        """Clear the principal and notify live subscribers synchronously."""
        self._record("sign_out")
        self._state.user = None
        self._state.session = None
        # Snapshot so callbacks that unsubscribe don't skip their neighbours.
        for listener in list(self._listeners):
            listener("SIGNED_OUT", None)
        logger.debug(f"[AUTH] Signed out, notified {len(self._listeners)} subscriber(s)")
        return QueryResponse(data=None, error=None)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        self._record("on_auth_state_change")
        self._listeners.append(callback)
        for change in self._state.state_changes:
            self._scheduler.call_later(self._replay_delay_ms, callback, change.event, change.session)
        logger.debug(f"[AUTH] Subscriber added, {len(self._state.state_changes)} replay(s) scheduled")
        return Subscription(callback, self._listeners)
