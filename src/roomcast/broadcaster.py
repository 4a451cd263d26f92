"""Topic-based pub/sub fan-out."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol, runtime_checkable

from roomcast.core.types import Connection

log = logging.getLogger(__name__)


@runtime_checkable
class Broadcaster(Protocol):
    """Minimal interface every broadcaster must implement."""

    async def subscribe(self, conn: Connection, topic: str) -> None:
        """Register *conn* as a recipient of *topic*. Idempotent."""
        ...

    async def unsubscribe(self, conn: Connection, topic: str) -> None:
        """Remove *conn* from *topic*. No-op if not subscribed."""
        ...

    async def publish(self, topic: str, message: str) -> int:
        """Deliver *message* to every subscriber. Return the delivered count."""
        ...


class InMemoryBroadcaster:
    """Single-process broadcaster keyed by topic name.

    Each topic has its own lock; ``publish`` holds it while queueing the
    message on every subscriber's outbox, so subscription changes on that
    topic are totally ordered with publishes. Network writes happen later
    on each connection's writer task. Topics with no subscribers are dropped.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, set[Connection]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @asynccontextmanager
    async def _topic_lock(self, topic: str) -> AsyncIterator[None]:
        while True:
            lock = self._locks.setdefault(topic, asyncio.Lock())
            await lock.acquire()
            # the topic may have been dropped while we waited
            if self._locks.get(topic) is lock:
                break
            lock.release()
        try:
            yield
        finally:
            if not self._subscribers.get(topic):
                self._subscribers.pop(topic, None)
                del self._locks[topic]
            lock.release()

    async def subscribe(self, conn: Connection, topic: str) -> None:
        async with self._topic_lock(topic):
            self._subscribers.setdefault(topic, set()).add(conn)

    async def unsubscribe(self, conn: Connection, topic: str) -> None:
        async with self._topic_lock(topic):
            subs = self._subscribers.get(topic)
            if subs is not None:
                subs.discard(conn)

    async def publish(self, topic: str, message: str) -> int:
        async with self._topic_lock(topic):
            recipients = list(self._subscribers.get(topic, ()))
            delivered = sum(conn.reply(message) for conn in recipients)
        log.debug("Published to %d/%d subscribers of %s", delivered, len(recipients), topic)
        return delivered

    def subscribers(self, topic: str) -> frozenset[Connection]:
        return frozenset(self._subscribers.get(topic, ()))

    def is_subscribed(self, conn: Connection, topic: str) -> bool:
        return conn in self._subscribers.get(topic, ())
