"""
Supamock Realtime - Channel emulator.

A channel handle collects listeners with ``on`` and, on ``subscribe``,
schedules every scripted event configured for the channel name. When an
event fires it is broadcast to the handle's listeners as they are at that
moment; a listener matches when its key starts with the event kind or its
own event kind is a prefix of the incoming one. The filter passed to ``on``
only becomes part of the key; it never filters payloads.

``unsubscribe`` empties the listener map but leaves scheduled broadcasts in
place, so a listener registered again on the same handle still receives
them.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from supamock.core.scheduler import Scheduler
from supamock.schemas import RealtimeEvent

logger = logging.getLogger(__name__)

RealtimeCallback = Callable[[Any], Any]
StatusCallback = Callable[[str], Any]


def listener_key(event: str, filter: Any) -> str:
    return f"{event}:{json.dumps(filter, sort_keys=True, default=str)}"


class RealtimeRegistry:
    """Scripted events per channel name."""

    def __init__(self, default_delay_ms: int = 0):
        self._channels: dict[str, list[RealtimeEvent]] = {}
        self._default_delay_ms = default_delay_ms

    def add_event(self, channel: str, event: str, payload: Any = None, delay_ms: int | None = None) -> RealtimeEvent:
        scripted = RealtimeEvent(
            event=event,
            payload=payload,
            delay_ms=self._default_delay_ms if delay_ms is None else delay_ms,
        )
        self._channels.setdefault(channel, []).append(scripted)
        return scripted

    def events(self, channel: str) -> list[RealtimeEvent]:
        return list(self._channels.get(channel, []))

    def channels(self) -> list[str]:
        return list(self._channels)


class RealtimeChannel:
    """One handle returned by ``channel(name)``."""

    def __init__(self, name: str, registry: RealtimeRegistry, scheduler: Scheduler):
        self.name = name
        self._registry = registry
        self._scheduler = scheduler
        # key -> (event kind, callbacks)
        self._listeners: dict[str, tuple[str, list[RealtimeCallback]]] = {}
        self.status: str = "CLOSED"

    @property
    def listener_count(self) -> int:
        return sum(len(callbacks) for _, callbacks in self._listeners.values())

    def on(self, event: str, filter: Any, callback: RealtimeCallback) -> RealtimeChannel:
        key = listener_key(event, filter)
        if key not in self._listeners:
            self._listeners[key] = (event, [])
        self._listeners[key][1].append(callback)
        return self

    def subscribe(self, callback: StatusCallback | None = None) -> RealtimeChannel:
        self.status = "SUBSCRIBED"
        if callback is not None:
            callback("SUBSCRIBED")
        scripted = self._registry.events(self.name)
        for event in scripted:
            self._scheduler.call_later(event.delay_ms, self._broadcast, event)
        logger.debug(f"[REALTIME] {self.name}: subscribed, {len(scripted)} event(s) scheduled")
        return self

    async def unsubscribe(self) -> str:
        self._listeners.clear()
        self.status = "CLOSED"
        return "ok"

    def _broadcast(self, event: RealtimeEvent) -> int:
        delivered = 0
        for key, (kind, callbacks) in list(self._listeners.items()):
            if key.startswith(event.event) or event.event.startswith(kind):
                for callback in list(callbacks):
                    callback(event.payload)
                    delivered += 1
        logger.debug(f"[REALTIME] {self.name}: {event.event} delivered to {delivered} listener(s)")
        return delivered
