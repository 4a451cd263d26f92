"""Connection lifecycle hooks invoked by the transport."""

from __future__ import annotations

import logging

from roomcast.broadcaster import Broadcaster, InMemoryBroadcaster
from roomcast.config import RoomcastConfig
from roomcast.core.types import Connection, Transport
from roomcast.membership import RoomMembershipManager
from roomcast.protocol import HELP_TEXT, WELCOME_TEMPLATE, CommandProtocolHandler
from roomcast.registry import ConnectionRegistry

log = logging.getLogger(__name__)


class ChatHooks:
    """The ``open`` / ``message`` / ``close`` entry points for one chat server.

    >>> hooks = ChatHooks()
    >>> conn = await hooks.open(websocket, "alice")
    >>> await hooks.message(conn, "/join lobby")
    >>> await hooks.close(conn)
    """

    def __init__(
        self,
        broadcaster: Broadcaster | None = None,
        *,
        registry: ConnectionRegistry | None = None,
        config: RoomcastConfig | None = None,
    ):
        self.config = config or RoomcastConfig()
        if broadcaster is None:
            broadcaster = InMemoryBroadcaster()
        if registry is None:
            registry = ConnectionRegistry(self.config.default_username)
        self.broadcaster = broadcaster
        self.registry = registry
        self.membership = RoomMembershipManager(self.broadcaster)
        self.protocol = CommandProtocolHandler(self.membership)

    async def open(self, transport: Transport, username: str | None = None) -> Connection:
        """Register a freshly upgraded connection and greet it."""
        conn = self.registry.create(username, transport)
        conn.start_writer(self.config.send_timeout)
        log.info("User %s connected", conn.username)
        conn.reply(WELCOME_TEMPLATE.format(username=conn.username))
        conn.reply(HELP_TEXT)
        return conn

    async def message(self, conn: Connection, text: str) -> None:
        log.debug("Message from %s: %s", conn.username, text)
        await self.protocol.handle(conn, text)

    async def close(self, conn: Connection) -> None:
        """Leave every room, stop writing and forget *conn*. Later calls are no-ops."""
        if conn.closed:
            return
        conn.closed = True
        log.info("User %s disconnected", conn.username)
        await self.membership.forced_leave_all(conn)
        await conn.stop_writer()
        self.registry.remove(conn)
