"""ASGI application wrapper.

Mutable during setup (error handler registration). Frozen when the
first lifespan or HTTP scope arrives, at which point the static handler
builder is built.
"""

import threading
from collections.abc import Callable
from typing import Any

from staticweb._internal.asgi import Receive, Scope, Send
from staticweb._internal.invoke import invoke
from staticweb.builder import StaticHandlerBuilder
from staticweb.errors import ConfigurationError
from staticweb.middleware.protocol import Handler
from staticweb.server.errors import ErrorHandler, ErrorHandlers
from staticweb.server.handler import handle_request


class App:
    """Serves a static handler over ASGI.

    Accepts either a ``StaticHandlerBuilder`` (built on first use) or an
    already built handler::

        app = App(StaticHandlerBuilder("./public").path("/").gzip(True))

        @app.error(404)
        def not_found():
            return "Nothing here", 404

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the handler, even when several ASGI workers call
        ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_handler",
        "_shutdown_hooks",
        "_startup_hooks",
        "_target",
    )

    def __init__(self, target: StaticHandlerBuilder | Handler) -> None:
        if not isinstance(target, StaticHandlerBuilder) and not callable(target):
            msg = f"App needs a StaticHandlerBuilder or a handler, got {type(target).__name__}"
            raise ConfigurationError(msg)
        self._target = target
        self._error_handlers: ErrorHandlers = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._handler: Handler | None = None
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Registration --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async hook to run at ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async hook to run at ASGI lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Serving --

    @property
    def handler(self) -> Handler:
        """The compiled static handler (builds it if needed)."""
        self._ensure_frozen()
        assert self._handler is not None
        return self._handler

    def run(self, host: str = "127.0.0.1", port: int = 8000, *, log_level: str = "info") -> None:
        """Serve the app with uvicorn (``pip install staticweb[server]``)."""
        self._ensure_frozen()

        from staticweb.server.dev import run_server

        run_server(self, host, port, log_level=log_level)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._handler is not None
        await handle_request(
            scope,
            receive,
            send,
            handler=self._handler,
            error_handlers=self._error_handlers,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Answer the ASGI lifespan protocol.

        The handler is built before startup completes, so the first HTTP
        request never pays for it.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await _run_hooks(self._startup_hooks)
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await _run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Freeze --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            target = self._target
            if isinstance(target, StaticHandlerBuilder):
                self._handler = target.build()
            else:
                self._handler = target
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register error handlers and hooks before the first request."
            )
            raise RuntimeError(msg)


async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
    for hook in hooks:
        await invoke(hook)
