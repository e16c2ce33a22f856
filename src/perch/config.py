"""Dispatcher configuration.

ServerConfig is frozen and validated once at construction.
"""

from dataclasses import dataclass
from pathlib import Path

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(base_dir="./public", port=8080)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "info"

    # Static files
    base_dir: str | Path = "."
    default_document: str = "/index.html"

    # Per-request deadline in seconds (None = wait forever)
    request_timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.default_document.startswith("/"):
            msg = f"default_document must start with '/', got {self.default_document!r}"
            raise ConfigurationError(msg)
        if ".." in self.default_document:
            msg = f"default_document must not contain '..', got {self.default_document!r}"
            raise ConfigurationError(msg)
        if self.request_timeout is not None and self.request_timeout <= 0:
            msg = f"request_timeout must be positive, got {self.request_timeout!r}"
            raise ConfigurationError(msg)

    @property
    def base_path(self) -> Path:
        """The base directory as a ``Path``."""
        return Path(self.base_dir)
