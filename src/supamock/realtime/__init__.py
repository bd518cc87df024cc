"""
Supamock Realtime Module.

Channel handles with scheduled, delayed broadcast of scripted events.
"""

from supamock.realtime.channel import RealtimeChannel, RealtimeRegistry, listener_key

__all__ = ["RealtimeChannel", "RealtimeRegistry", "listener_key"]
