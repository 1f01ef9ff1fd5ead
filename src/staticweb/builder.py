"""Static handler builder.

Mutable during setup (fluent configuration calls). Frozen by the first
``build()``, which compiles the request handler exactly once:

    file system ─► ListingFileSystem ─► FileServer ─► strip_prefix ─► gzip
                                                                       │
    exception routes (insertion order) ─────────────── chain ◄─────────┘

Usage::

    handler = (
        StaticHandlerBuilder("./public")
        .path("/static")
        .gzip(True)
        .except_(Route("/static/version.json", version))
        .build()
    )
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field

from staticweb.compression import acquire_gzip_writer, release_gzip_writer
from staticweb.fileserver import FileServer
from staticweb.filesystem import Dir, FileSystem, ListingFileSystem
from staticweb.http.request import Request
from staticweb.http.response import Response
from staticweb.middleware.priority import prioritize
from staticweb.middleware.protocol import Handler, chain
from staticweb.middleware.strip import strip_prefix
from staticweb.paths import abs_path, directory_exists, to_web_path
from staticweb.routing.route import Route

logger = logging.getLogger("staticweb.builder")


@dataclass(slots=True)
class StaticConfig:
    """Builder options. Owned by one builder; read once by ``build()``."""

    root_directory: str
    request_path: str
    strip_path: bool = True
    gzip: bool = False
    list_directories: bool = False
    exceptions: list[Route] = field(default_factory=list)


class StaticHandlerBuilder:
    """Fluent builder for a static file request handler.

    Every configuration method returns the builder. Options are not
    validated; a bad value shows up as request-time behaviour.

    Thread safety:
        ``build()`` uses a Lock + double-check so that exactly one caller
        compiles the handler, even when many workers ask for it at once.
        Every caller gets the same handler object. Configuration calls
        after that raise ``RuntimeError``: the built handler would not
        see them.
    """

    __slots__ = ("_build_lock", "_built", "_filesystem", "_handler", "config")

    def __init__(self, directory: str | os.PathLike[str], *, filesystem: FileSystem | None = None) -> None:
        directory = os.fspath(directory)
        self.config = StaticConfig(
            root_directory=abs_path(directory),
            # The default route is the directory itself
            request_path=to_web_path(directory),
        )
        self._filesystem = filesystem
        self._handler: Handler | None = None
        self._built = False
        self._build_lock = threading.Lock()

        if filesystem is None and not directory_exists(self.config.root_directory):
            logger.warning("Static directory %r does not exist", self.config.root_directory)

    def __repr__(self) -> str:
        return f"StaticHandlerBuilder({self.config.root_directory!r}, path={self.config.request_path!r})"

    # -- Configuration --

    def path(self, request_path: str) -> StaticHandlerBuilder:
        """Set the URL prefix. Defaults to the directory as a web path."""
        self._check_not_built()
        self.config.request_path = to_web_path(request_path)
        return self

    def gzip(self, enable: bool) -> StaticHandlerBuilder:
        """Compress responses for clients that accept gzip. Defaults to off."""
        self._check_not_built()
        self.config.gzip = enable
        return self

    def listing(self, list_directories: bool) -> StaticHandlerBuilder:
        """Render directory listings. Defaults to off."""
        self._check_not_built()
        self.config.list_directories = list_directories
        return self

    def strip_path(self, enable: bool) -> StaticHandlerBuilder:
        """Remove the URL prefix before resolving files. Defaults to on."""
        self._check_not_built()
        self.config.strip_path = enable
        return self

    def except_(self, *routes: Route) -> StaticHandlerBuilder:
        """Give *routes* priority over the static files, in the order given."""
        self._check_not_built()
        self.config.exceptions.extend(routes)
        return self

    # -- Build --

    @property
    def built(self) -> bool:
        return self._built

    def build(self) -> Handler:
        """Compile the handler (once) and return it.

        Repeated and concurrent calls return the same object.
        """
        if self._built:
            assert self._handler is not None
            return self._handler
        with self._build_lock:
            if not self._built:
                self._handler = self._compile()
                self._built = True
        assert self._handler is not None
        return self._handler

    def _compile(self) -> Handler:
        """Compose the handler. MUST only be called while holding _build_lock."""
        config = self.config
        root = self._filesystem if self._filesystem is not None else Dir(config.root_directory)
        filesystem = ListingFileSystem(root, list_directories=config.list_directories)

        handler: Handler = FileServer(filesystem)
        if config.strip_path:
            handler = strip_prefix(config.request_path, handler)

        static = _static_handler(handler, gzip=config.gzip)

        logger.debug(
            "Built static handler for %r at %r (strip=%s, gzip=%s, listing=%s, exceptions=%d)",
            config.root_directory,
            config.request_path,
            config.strip_path,
            config.gzip,
            config.list_directories,
            len(config.exceptions),
        )

        if config.exceptions:
            return chain(tuple(prioritize(route) for route in config.exceptions), static)
        return static

    def _check_not_built(self) -> None:
        if self._built:
            msg = (
                "Cannot configure a static handler after build(). "
                "Set every option before the handler is built."
            )
            raise RuntimeError(msg)


def _static_handler(serve: Handler, *, gzip: bool) -> Handler:
    """Wrap *serve* so that gzip-capable clients get a compressed body."""

    async def handle(request: Request) -> Response:
        if not (gzip and request.accepts_gzip):
            return await serve(request)

        writer = acquire_gzip_writer()
        try:
            response = await serve(request)
            body = response.body_bytes
            if body:
                writer.write(body)
                body = writer.close()
        finally:
            release_gzip_writer(writer)

        return (
            response.with_body(body)
            .without_header("Content-Length")
            .with_header("Vary", "Accept-Encoding")
            .without_header("Content-Encoding")
            .with_header("Content-Encoding", "gzip")
        )

    return handle


# -- Convenience constructors --


def static_handler(
    directory: str | os.PathLike[str],
    *,
    path: str | None = None,
    gzip: bool = False,
    listing: bool = False,
    strip_path: bool = True,
) -> Handler:
    """Build a static handler in one call.

    ``path`` defaults to the directory as a web path, like the builder.
    """
    builder = StaticHandlerBuilder(directory)
    if path is not None:
        builder.path(path)
    return builder.gzip(gzip).listing(listing).strip_path(strip_path).build()


def static_web(request_path: str, directory: str | os.PathLike[str], *routes: Route) -> Handler:
    """Serve *directory* under *request_path*, answering *routes* first."""
    return StaticHandlerBuilder(directory).path(request_path).except_(*routes).build()
