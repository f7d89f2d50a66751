"""Server configuration.

Values come from ``TEAMHEX_*`` environment variables, and the CLI
overrides them with explicit options.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from teamhex import __version__
from teamhex.utils.logger import resolve_level

_ENV_PREFIX = "TEAMHEX_"


class ServerConfig(BaseModel):
    """Settings for running the HTTP API."""

    model_config = ConfigDict(frozen=True)

    data_file: Path = Field(default=Path("teamhex.json"), description="Path to the JSON colors file.")
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=0, le=65535)
    variant: Literal["auto", "eras", "classic"] = "auto"
    version: str = __version__
    log_level: str = "NORMAL"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        resolve_level(value)
        return value.upper()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> ServerConfig:
        """Build a config from ``TEAMHEX_*`` variables.

        Keyword *overrides* that are not ``None`` win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for field in ("data_file", "host", "port", "variant", "version", "log_level"):
            env_name = _ENV_PREFIX + ("FILE" if field == "data_file" else field.upper())
            if env_name in env:
                values[field] = env[env_name]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"


def parse_addr(addr: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address.

    An empty host (``":5000"``) means all interfaces.

    Raises:
        ValueError: No port, or the port is not a number.
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        msg = f"invalid listen address {addr!r}; expected host:port"
        raise ValueError(msg)
    return host.strip("[]") or "0.0.0.0", int(port)
