"""Content negotiation — turn route-handler return values into Responses.

Exception-route handlers may return plain values instead of building a
``Response`` by hand:

- ``Response``        → unchanged
- ``Redirect``        → 3xx with ``Location``
- ``str``             → ``text/html; charset=utf-8``
- ``bytes``           → ``application/octet-stream``
- ``dict`` / ``list`` → JSON
- ``(value, status)`` → the converted value with *status*
- ``None``            → empty 204
"""

import json
from typing import Any

from staticweb.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert a handler return value into a ``Response``."""
    match value:
        case Response():
            return value
        case Redirect(url=url, status=status, headers=headers):
            return Response(body="", status=status, headers=(("Location", url), *headers))
        case tuple() if len(value) == 2 and isinstance(value[1], int):
            return negotiate(value[0]).with_status(value[1])
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json.dumps(value),
                content_type="application/json",
            )
        case None:
            return Response(body="", status=204)
        case _:
            msg = f"Cannot convert {type(value).__name__} into a response"
            raise TypeError(msg)
