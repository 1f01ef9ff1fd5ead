"""Serve configuration.

ServeConfig is a frozen dataclass — immutable after creation, with a
default for every field. The CLI builds one from its arguments and turns
it into a ``StaticHandlerBuilder``.
"""

from dataclasses import dataclass
from pathlib import Path

from staticweb.builder import StaticHandlerBuilder


@dataclass(frozen=True, slots=True)
class ServeConfig:
    """Options for serving one directory. Immutable after creation.

    Override what you need::

        config = ServeConfig(directory="./public", request_path="/", gzip=True)
    """

    # Files
    directory: str | Path = "."
    request_path: str | None = None  # None = the directory as a web path
    strip_path: bool = True
    gzip: bool = False
    listing: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"

    def builder(self) -> StaticHandlerBuilder:
        """Return an unbuilt builder configured from these options."""
        builder = StaticHandlerBuilder(self.directory)
        if self.request_path is not None:
            builder.path(self.request_path)
        return builder.gzip(self.gzip).listing(self.listing).strip_path(self.strip_path)
