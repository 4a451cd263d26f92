"""Roomcast — real-time chat rooms over WebSockets."""

from roomcast.broadcaster import Broadcaster, InMemoryBroadcaster
from roomcast.config import RoomcastConfig
from roomcast.core.types import Connection
from roomcast.hooks import ChatHooks
from roomcast.registry import ConnectionRegistry

__version__ = "0.1.0"
__all__ = [
    "Broadcaster",
    "ChatHooks",
    "Connection",
    "ConnectionRegistry",
    "InMemoryBroadcaster",
    "RoomcastConfig",
]
