"""Roomcast configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from roomcast.exceptions import ConfigError

_ENV_PREFIX = "ROOMCAST_"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class RoomcastConfig(BaseModel):
    """Global configuration for a Roomcast server."""

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    chat_path: str = "/chat"
    default_username: str = Field(default="Anonymous", min_length=1)
    send_timeout: float = Field(default=5.0, gt=0.0)
    log_level: LogLevel = "INFO"

    @field_validator("chat_path")
    @classmethod
    def _leading_slash(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("chat_path must start with '/'")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RoomcastConfig:
        """Build a config from ``ROOMCAST_*`` environment variables."""
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(_ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid Roomcast configuration: {e}") from e
