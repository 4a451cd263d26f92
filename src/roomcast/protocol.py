"""Chat command protocol: parse inbound text frames and dispatch them."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from roomcast.core.types import Connection
from roomcast.exceptions import CommandError
from roomcast.membership import RoomMembershipManager

COMMAND_PREFIX = "/"

WELCOME_TEMPLATE = "Welcome, {username}!"

HELP_TEXT = """Available commands:
- /join [room] - Join a room
- /leave [room] - Leave a room
- /room [room] [message] - Send a message to a room
- /rooms - List all available rooms
- /myrooms - List rooms you've joined
- Any other message will be echoed back to you"""

JOIN_USAGE = "Please specify a room name: /join [room]"
LEAVE_USAGE = "Please specify a room name: /leave [room]"
ROOM_USAGE = "Please specify a room name and message: /room [room] [message]"
ROOMS_REPLY = "To join a room, use: /join [room]"
NO_ROOMS_REPLY = "You have not joined any rooms. Join one with /join [room]"
UNKNOWN_TEMPLATE = (
    "Unknown command: {command}. Available commands: /join, /leave, /room, /rooms, /myrooms"
)


@dataclass
class Command:
    """A parsed ``/``-prefixed command line."""

    name: str  # lower-cased
    raw_name: str  # as typed, for the unknown-command reply
    args: list[str] = field(default_factory=list)

    @property
    def room(self) -> str | None:
        return self.args[0] if self.args else None

    @property
    def body(self) -> str:
        """Everything after the room argument, single-space joined."""
        return " ".join(self.args[1:])


def parse(text: str) -> Command | None:
    """Parse *text* into a :class:`Command`, or ``None`` if it is plain chat."""
    if not text.startswith(COMMAND_PREFIX):
        return None
    tokens = text[len(COMMAND_PREFIX):].split()
    raw_name = tokens[0] if tokens else ""
    return Command(name=raw_name.lower(), raw_name=raw_name, args=tokens[1:])


Handler = Callable[[Connection, Command], Awaitable[None]]


class CommandProtocolHandler:
    """Routes each text frame to a membership operation or a direct reply."""

    def __init__(self, membership: RoomMembershipManager) -> None:
        self.membership = membership
        self._handlers: dict[str, Handler] = {
            "join": self._join,
            "leave": self._leave,
            "room": self._room,
            "rooms": self._rooms,
            "myrooms": self._myrooms,
        }

    async def handle(self, conn: Connection, text: str) -> None:
        command = parse(text)
        if command is None:
            conn.reply(f"{conn.username}: {text}")
            return
        handler = self._handlers.get(command.name)
        if handler is None:
            conn.reply(UNKNOWN_TEMPLATE.format(command=command.raw_name))
            return
        try:
            await handler(conn, command)
        except CommandError as e:
            conn.reply(e.reply)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def _join(self, conn: Connection, command: Command) -> None:
        if not command.room:
            raise CommandError(JOIN_USAGE)
        await self.membership.join(conn, command.room)

    async def _leave(self, conn: Connection, command: Command) -> None:
        if not command.room:
            raise CommandError(LEAVE_USAGE)
        await self.membership.leave(conn, command.room)

    async def _room(self, conn: Connection, command: Command) -> None:
        if not command.room or not command.body:
            raise CommandError(ROOM_USAGE)
        await self.membership.room_message(conn, command.room, command.body)

    async def _rooms(self, conn: Connection, command: Command) -> None:
        # rooms are implicit in the subscription table and cannot be listed
        conn.reply(ROOMS_REPLY)

    async def _myrooms(self, conn: Connection, command: Command) -> None:
        rooms = conn.rooms
        if not rooms:
            conn.reply(NO_ROOMS_REPLY)
            return
        conn.reply("Your rooms:\n" + "\n".join(rooms))
