"""Pydantic model for server configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

from mdserver.config.defaults import (
    DEFAULT_COALESCE_RENDERS,
    DEFAULT_LISTEN,
    DEFAULT_LOG_LEVEL,
    DEFAULT_POSTS_DIR,
    DEFAULT_STATIC_DIR,
    DEFAULT_UPLOAD_DIR,
)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ServerConfig(BaseModel):
    """Resolved server settings."""

    listen: str = DEFAULT_LISTEN
    static_dir: Path = Path(DEFAULT_STATIC_DIR)
    upload_dir: Path = Path(DEFAULT_UPLOAD_DIR)
    posts_dir: Path = Path(DEFAULT_POSTS_DIR)
    templates_dir: Path | None = None
    coalesce_renders: bool = DEFAULT_COALESCE_RENDERS
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("listen")
    @classmethod
    def _check_listen(cls, v: str) -> str:
        host, sep, port = v.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"listen must be 'host:port', got {v!r}")
        if not 0 < int(port) < 65536:
            raise ValueError(f"listen port out of range: {port}")
        return v

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}")
        return level

    @property
    def host(self) -> str:
        host = self.listen.rpartition(":")[0]
        return host.strip("[]") or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.listen.rpartition(":")[2])
