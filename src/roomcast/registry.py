"""Connection registry — per-connection state for every open client."""

from __future__ import annotations

from roomcast.core.types import Connection, Transport

DEFAULT_USERNAME = "Anonymous"


class ConnectionRegistry:
    """Tracks the open connections and their usernames and rooms."""

    def __init__(self, default_username: str = DEFAULT_USERNAME) -> None:
        self._default_username = default_username
        self._connections: dict[str, Connection] = {}

    def create(self, username: str | None, transport: Transport) -> Connection:
        """Register a new connection with no joined rooms."""
        conn = Connection(username=username or self._default_username, transport=transport)
        self._connections[conn.id] = conn
        return conn

    def get(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def remove(self, conn: Connection) -> bool:
        """Forget *conn*. Return ``True`` if it was registered."""
        return self._connections.pop(conn.id, None) is not None

    @staticmethod
    def get_username(conn: Connection) -> str:
        return conn.username

    @staticmethod
    def get_rooms(conn: Connection) -> set[str]:
        return set(conn.rooms)

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, conn: object) -> bool:
        return isinstance(conn, Connection) and self._connections.get(conn.id) is conn
