"""
Runtime settings, built from CLI flags with environment fallbacks.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dictfleet.core.autocomplete import INDEX_FILE
from dictfleet.core.errors import ConfigError


DEFAULT_PORT = 3000
DEFAULT_BASE_PORT = 44000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_CLOSE_TIMEOUT = 5.0

ENV_DIR = "DICTFLEET_DIR"
ENV_PORT = "DICTFLEET_PORT"


def parse_port(value, flag: str = "--port") -> int:
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{flag}: invalid port {value!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"{flag}: port out of range: {port}")
    return port


def parse_dir(value) -> str:
    if not value:
        raise ConfigError("--dir: required, the absolute path of the dictionary directory")
    path = Path(value)
    if not path.is_absolute():
        raise ConfigError(f"--dir: must be an absolute path: {value}")
    if not path.exists():
        raise ConfigError(f"--dir: directory does not exist: {value}")
    if not path.is_dir():
        raise ConfigError(f"--dir: not a directory: {value}")
    return str(path)


@dataclass
class Settings:
    dir: str
    port: int = DEFAULT_PORT
    base_port: int = DEFAULT_BASE_PORT
    host: str = DEFAULT_HOST
    index_file: str = INDEX_FILE
    static_dir: str | None = None
    close_timeout: float = DEFAULT_CLOSE_TIMEOUT
    log_level: str = "info"

    @classmethod
    def from_args(cls, args, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ

        port = getattr(args, "port", None) or environ.get(ENV_PORT) or DEFAULT_PORT
        base_port = getattr(args, "base_port", None) or DEFAULT_BASE_PORT
        directory = getattr(args, "dir", None) or environ.get(ENV_DIR)

        static_dir = getattr(args, "static", None)
        if static_dir and not Path(static_dir).is_dir():
            raise ConfigError(f"--static: not a directory: {static_dir}")

        return cls(
            dir=parse_dir(directory),
            port=parse_port(port),
            base_port=parse_port(base_port, "--base-port"),
            index_file=getattr(args, "index_file", None) or INDEX_FILE,
            static_dir=static_dir,
            close_timeout=getattr(args, "close_timeout", None) or DEFAULT_CLOSE_TIMEOUT,
            log_level=getattr(args, "log_level", None) or "info",
        )

    def check_fleet_range(self, count: int) -> None:
        """The fleet occupies base_port .. base_port+count-1."""
        last = self.base_port + count - 1
        if last > 65535:
            raise ConfigError(f"--base-port: {count} dictionaries do not fit above {self.base_port}")
        if self.base_port <= self.port <= last:
            raise ConfigError(f"--port {self.port} collides with the dictionary port range {self.base_port}-{last}")
