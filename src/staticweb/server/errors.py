"""Turn exceptions raised while handling a request into responses.

``HTTPError`` subclasses (404 from a prefix mismatch, 403 from the file
system, 416 from a bad range) become plain-text responses unless the app
registered an error handler for the exception type or status. Anything
else is logged and answered with a 500.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from staticweb._internal.invoke import invoke
from staticweb.errors import HTTPError
from staticweb.http.request import Request
from staticweb.http.response import Response
from staticweb.server.negotiation import negotiate

logger = logging.getLogger("staticweb.server")

# Takes (), (request) or (request, exc); returns anything negotiate() accepts
ErrorHandler: TypeAlias = Callable[..., Any]
ErrorHandlers: TypeAlias = dict[int | type, ErrorHandler]

_PLAIN_TEXT = "text/plain; charset=utf-8"


async def call_error_handler(handler: ErrorHandler, request: Request, exc: Exception, status: int) -> Response:
    """Run a registered error handler, passing as many arguments as it takes.

    A handler that returns a 200 keeps the error's *status*.
    """
    arity = len(inspect.signature(handler).parameters)
    args = (request, exc)[: min(arity, 2)]
    response = negotiate(await invoke(handler, *args))
    return response.with_status(status) if response.status == 200 else response


async def handle_http_error(exc: HTTPError, request: Request, error_handlers: ErrorHandlers) -> Response:
    """Map an ``HTTPError`` to a response. The error's headers are always sent."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc, exc.status)
    else:
        body = "" if request.method == "HEAD" else (exc.detail or f"Error {exc.status}")
        response = Response(body=body, status=exc.status, content_type=_PLAIN_TEXT)

    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(exc: Exception, request: Request, error_handlers: ErrorHandlers) -> Response:
    """Log an unexpected exception and answer with a 500."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return await call_error_handler(handler, request, exc, 500)
    return Response(body="Internal Server Error", status=500, content_type=_PLAIN_TEXT)
