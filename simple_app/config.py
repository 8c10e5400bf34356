from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_HOST = "0.0.0.0"  # Listen on all interfaces for Docker
DEFAULT_PORT = 3000


class ConfigError(ValueError):
    pass


def parse_port(raw: str) -> int:
    try:
        port = int(raw.strip())
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 <= port <= 65535:
        raise ConfigError(f"PORT must be between 0 and 65535, got {port}")
    return port


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        env = os.environ if environ is None else environ
        host = env.get("HOST") or DEFAULT_HOST
        raw_port = env.get("PORT")
        port = parse_port(raw_port) if raw_port else DEFAULT_PORT
        return cls(host=host, port=port)
