"""One HTTP request, from ASGI scope to ASGI messages."""

from staticweb._internal.asgi import Receive, Scope, Send
from staticweb.errors import HTTPError
from staticweb.http.request import Request
from staticweb.middleware.protocol import Handler
from staticweb.server.errors import ErrorHandlers, handle_http_error, handle_internal_error
from staticweb.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    handler: Handler,
    error_handlers: ErrorHandlers,
) -> None:
    """Run *handler* for an ``http`` scope and send whatever it produced.

    Errors never escape: they are turned into responses first.
    """
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    try:
        response = await handler(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers)
    await send_response(response, send)
