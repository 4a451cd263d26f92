"""Roomcast exceptions."""


class RoomcastError(Exception):
    """Base exception for all Roomcast errors."""


class CommandError(RoomcastError):
    """Raised when a chat command is malformed; *reply* goes back to the sender."""

    def __init__(self, reply: str):
        self.reply = reply
        super().__init__(reply)


class DeliveryError(RoomcastError):
    """Raised when a frame cannot be sent to a connection."""

    def __init__(self, connection_id: str, reason: str = "connection closed"):
        self.connection_id = connection_id
        super().__init__(f"Delivery to {connection_id} failed: {reason}")


class ConfigError(RoomcastError):
    """Raised on invalid configuration."""
