"""Route exceptions for the static handler.

``prioritize(route)`` turns an exception route into middleware: when the
request matches the route it is answered by the route's handler, and the
rest of the chain (ultimately the static handler) never runs. Anything
else is passed on unchanged.
"""

import inspect
import logging
from typing import Any

from staticweb._internal.invoke import invoke
from staticweb.errors import MethodNotAllowed, NotFound
from staticweb.http.request import Request
from staticweb.http.response import Response
from staticweb.middleware.protocol import Next
from staticweb.routing.route import Route
from staticweb.routing.router import Router
from staticweb.server.negotiation import negotiate

logger = logging.getLogger("staticweb.routing")


class Prioritized:
    """Middleware that answers requests matching one route.

    Usage::

        mw = Prioritized(Route("/static/version.json", version))
        response = await mw(request, static_handler)

    The handler receives ``request`` (by name or by ``Request``
    annotation) and any captured path values it names.
    """

    __slots__ = ("_parameters", "_router", "route")

    def __init__(self, route: Route) -> None:
        self.route = route
        self._router = Router()
        self._router.add(route)
        self._router.compile()
        self._parameters = inspect.signature(route.handler, eval_str=True).parameters

    def __repr__(self) -> str:
        return f"Prioritized({self.route.path!r})"

    async def __call__(self, request: Request, next: Next) -> Response:
        try:
            match = self._router.match(request.method, request.path)
        except (NotFound, MethodNotAllowed):
            return await next(request)

        logger.debug("%s %s answered by exception route %r", request.method, request.path, self.route.path)
        request = request.with_path_params(match.path_params)

        kwargs: dict[str, Any] = {}
        for name, param in self._parameters.items():
            if name == "request" or param.annotation is Request:
                kwargs[name] = request
            elif name in match.values:
                kwargs[name] = match.values[name]
        return negotiate(await invoke(self.route.handler, **kwargs))


def prioritize(route: Route) -> Prioritized:
    """Give *route* priority over whatever follows it in the chain."""
    return Prioritized(route)
