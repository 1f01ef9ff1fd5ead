"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in pieces the static handler is composed from:
    chain -- Fold middleware around a handler
    Prioritized / prioritize -- Answer one exception route before static files
    strip_prefix -- Remove a URL prefix, 404 when it is missing
"""

from staticweb.middleware.protocol import Handler, Middleware, Next, chain
from staticweb.middleware.priority import Prioritized, prioritize
from staticweb.middleware.strip import strip_prefix

__all__ = [
    "Handler",
    "Middleware",
    "Next",
    "Prioritized",
    "chain",
    "prioritize",
    "strip_prefix",
]
