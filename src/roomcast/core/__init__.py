"""Roomcast core types."""

from roomcast.core.types import Connection, Transport

__all__ = ["Connection", "Transport"]
