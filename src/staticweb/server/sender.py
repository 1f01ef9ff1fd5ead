"""Write a ``Response`` to ASGI ``send()``."""

from staticweb._internal.asgi import Send
from staticweb.http.response import Response

# 1xx, 204 and 304 never carry a body
_BODYLESS = frozenset({204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Send the start and body messages for *response*.

    ``Content-Length`` is computed from the body unless the response
    already carries one, as HEAD responses do.
    """
    has_body = not (100 <= response.status < 200 or response.status in _BODYLESS)
    body = response.body_bytes if has_body else b""

    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers.extend((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in response.headers)
    if has_body and not any(name == b"content-length" for name, _ in headers):
        headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": body})
