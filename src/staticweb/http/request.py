"""Immutable HTTP request.

Path rewriting (prefix stripping) and route matching produce new
``Request`` objects instead of mutating the one the server created.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from staticweb._internal.asgi import Receive, Scope
from staticweb.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An HTTP request as the static handler sees it.

    ``path`` is the path the current handler should resolve; it starts
    as the ASGI path and loses the URL prefix when stripping is on.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    path_params: dict[str, str] = field(default_factory=dict)

    # ASGI receive callable, consumed at most once by body()
    _receive: Receive | None = field(default=None, repr=False, compare=False)
    # Shared between derived requests so the body is read once
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def accepts_gzip(self) -> bool:
        """True if ``Accept-Encoding`` lists ``gzip`` (or ``*``) with a non-zero q."""
        for token, q in self.headers.tokens("accept-encoding"):
            if token in ("gzip", "x-gzip", "*"):
                return q > 0
        return False

    def with_path(self, path: str) -> Request:
        """Return a copy of this request addressed to *path*."""
        return replace(self, path=path)

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy of this request carrying matched route parameters."""
        return replace(self, path_params=path_params)

    async def body(self) -> bytes:
        """Read the whole request body. Later calls return the cached bytes."""
        if "body" not in self._cache:
            chunks: list[bytes] = []
            if self._receive is not None:
                while True:
                    message = await self._receive()
                    chunks.append(message.get("body", b""))
                    if not message.get("more_body", False):
                        break
            self._cache["body"] = b"".join(chunks)
        return self._cache["body"]

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b""),
            _receive=receive,
        )
