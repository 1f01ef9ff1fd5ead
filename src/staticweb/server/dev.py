"""Local server runner.

Starts uvicorn with the live App object. uvicorn is an optional
dependency (``pip install staticweb[server]``); any ASGI server can
serve an ``App`` directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from staticweb.app import App


def run_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
    """Serve *app* on *host*:*port* until interrupted.

    Args:
        app: ASGI callable (staticweb App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: uvicorn log level name (``"debug"``, ``"info"``, ...).
    """
    try:
        import uvicorn
    except ImportError as exc:
        msg = "Serving requires uvicorn. Install it with: pip install staticweb[server]"
        raise RuntimeError(msg) from exc

    uvicorn.run(app, host=host, port=port, log_level=log_level, lifespan="on")
