"""HTTP response values.

``Response`` is immutable; every ``with_*()`` call returns a new one, so
a wrapper such as the gzip adapter can rewrite the body and headers of
whatever the file server produced without touching it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response.

    ``content_type`` is sent as the ``Content-Type`` header. An explicit
    ``Content-Length`` in ``headers`` is sent as-is (HEAD responses rely
    on this); otherwise the sender computes it from the body.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a copy with one more header (existing ones are kept)."""
        return replace(self, headers=(*self.headers, (name, value)))

    def without_header(self, name: str) -> Response:
        """Return a copy with every *name* header removed."""
        lowered = name.lower()
        return replace(self, headers=tuple(h for h in self.headers if h[0].lower() != lowered))

    def with_body(self, body: str | bytes) -> Response:
        return replace(self, body=body)

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive), or *default*."""
        lowered = name.lower()
        return next((v for n, v in self.headers if n.lower() == lowered), default)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect returned from an exception-route handler."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()
