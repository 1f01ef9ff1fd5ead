"""Handler and middleware protocols.

A handler is any async callable ``(request) -> Response``. The static
handler, the file server, and a fully chained pipeline all have this
shape.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The framework checks the shape, not the lineage.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from staticweb.http.request import Request
from staticweb.http.response import Response

# A compiled request handler
Handler: TypeAlias = Callable[[Request], Awaitable[Response]]

# The next handler in a middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for staticweb middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class Prioritized:
            async def __call__(self, request: Request, next: Next) -> Response:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...


def chain(middleware: tuple[Middleware, ...] | list[Middleware], handler: Handler) -> Handler:
    """Fold *middleware* around *handler* into a single handler.

    The first middleware is outermost: it runs first and decides whether
    the rest of the chain (ending in *handler*) runs at all.
    """
    result = handler
    for mw in reversed(middleware):
        outer = result

        async def make_next(req: Request, _mw: Middleware = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        result = make_next
    return result
