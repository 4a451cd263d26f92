"""Room membership — keeps connection room sets and broadcaster subscriptions in step."""

from __future__ import annotations

import logging

from roomcast.broadcaster import Broadcaster
from roomcast.core.types import Connection

log = logging.getLogger(__name__)


class RoomMembershipManager:
    """Join, leave and talk in rooms.

    A room name is in ``conn.rooms`` exactly when ``conn`` is subscribed to
    the topic of the same name. Both sides change together under the
    connection's lock.
    """

    def __init__(self, broadcaster: Broadcaster) -> None:
        self.broadcaster = broadcaster

    async def join(self, conn: Connection, room: str) -> None:
        """Join *room*. Joining again re-sends the confirmation and announcement."""
        async with conn.lock:
            await self.broadcaster.subscribe(conn, room)
            conn.add_room(room)
        log.info("User %s joined room: %s", conn.username, room)
        conn.reply(f"You have joined room: {room}")
        await self.broadcaster.publish(room, f"{conn.username} has joined the room")

    async def leave(self, conn: Connection, room: str) -> None:
        async with conn.lock:
            if not conn.in_room(room):
                left = False
            else:
                await self.broadcaster.unsubscribe(conn, room)
                conn.discard_room(room)
                left = True
        if not left:
            conn.reply(f"You are not in room {room}")
            return
        log.info("User %s left room: %s", conn.username, room)
        conn.reply(f"You have left room: {room}")
        await self.broadcaster.publish(room, f"{conn.username} has left the room")

    async def forced_leave_all(self, conn: Connection) -> None:
        """Drop *conn* from every room it joined, announcing the disconnect."""
        async with conn.lock:
            for room in conn.rooms:
                await self.broadcaster.publish(
                    room, f"{conn.username} has left the room (disconnected)"
                )
                await self.broadcaster.unsubscribe(conn, room)
            conn.clear_rooms()

    async def room_message(self, conn: Connection, room: str, text: str) -> None:
        if not conn.in_room(room):
            conn.reply(f"You are not in room {room}. Join it first with /join {room}")
            return
        await self.broadcaster.publish(room, f"[{room}] {conn.username}: {text}")

