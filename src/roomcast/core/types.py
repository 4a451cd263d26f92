"""Core connection types for Roomcast."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from roomcast.exceptions import DeliveryError

log = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Anything that can push a text frame to a client (e.g. a Starlette WebSocket)."""

    async def send_text(self, data: str) -> None:
        ...


@dataclass(eq=False)
class Connection:
    """Per-connection state, owned by the flow that handles the connection.

    Outbound frames are queued with :meth:`reply` and written to the
    transport by a writer task, one connection at a time, so a slow peer
    only ever delays itself. Connections compare and hash by identity so
    they can live in subscriber sets.
    """

    username: str
    transport: Transport
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    closed: bool = False
    # insertion-ordered set of joined room names
    _rooms: dict[str, None] = field(default_factory=dict, repr=False)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    outbox: asyncio.Queue[str] = field(default_factory=asyncio.Queue, repr=False)
    _writer: asyncio.Task | None = field(default=None, repr=False)

    @property
    def rooms(self) -> list[str]:
        """Joined rooms in join order."""
        return list(self._rooms)

    def in_room(self, room: str) -> bool:
        return room in self._rooms

    def add_room(self, room: str) -> None:
        self._rooms.setdefault(room, None)

    def discard_room(self, room: str) -> None:
        self._rooms.pop(room, None)

    def clear_rooms(self) -> None:
        self._rooms.clear()

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    def reply(self, message: str) -> bool:
        """Queue *message* for the client. Return ``False`` if the connection is closed."""
        if self.closed:
            log.debug("Dropped message for closed connection %s", self.id)
            return False
        self.outbox.put_nowait(message)
        return True

    async def write(self, message: str) -> None:
        """Write *message* straight to the transport. Raises :class:`DeliveryError`."""
        try:
            await self.transport.send_text(message)
        except Exception as e:
            raise DeliveryError(self.id, str(e) or type(e).__name__) from e

    async def run_writer(self, send_timeout: float) -> None:
        """Drain the outbox forever; each write is bounded by *send_timeout*."""
        while True:
            message = await self.outbox.get()
            try:
                await asyncio.wait_for(self.write(message), timeout=send_timeout)
            except DeliveryError as e:
                log.debug("%s", e)
            except asyncio.TimeoutError:
                log.debug("Write to %s timed out after %ss", self.id, send_timeout)
            finally:
                self.outbox.task_done()

    def start_writer(self, send_timeout: float) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(self.run_writer(send_timeout))

    async def stop_writer(self) -> None:
        if self._writer is None:
            return
        self._writer.cancel()
        try:
            await self._writer
        except asyncio.CancelledError:
            pass
        self._writer = None

    async def flush(self) -> None:
        """Wait until every queued message has been written (or given up on)."""
        await self.outbox.join()
