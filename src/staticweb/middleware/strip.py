"""Request-path prefix stripping."""

from staticweb.errors import NotFound
from staticweb.http.request import Request
from staticweb.http.response import Response
from staticweb.middleware.protocol import Handler


def strip_prefix(prefix: str, handler: Handler) -> Handler:
    """Serve requests by removing *prefix* from the path and calling *handler*.

    A request whose path does not begin with *prefix* raises ``NotFound``
    and *handler* is never called. An empty *prefix* returns *handler*
    itself.
    """
    if not prefix:
        return handler

    async def stripped(request: Request) -> Response:
        path = request.path.removeprefix(prefix)
        if len(path) == len(request.path):
            raise NotFound(f"{request.path!r} is outside {prefix!r}")
        return await handler(request.with_path(path))

    return stripped
