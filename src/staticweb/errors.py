"""staticweb exception hierarchy.

Shared across the builder, file server, middleware, and ASGI layer so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class StaticWebError(Exception):
    """Base for all staticweb-specific errors."""


class ConfigurationError(StaticWebError):
    """Raised when a handler or app is configured inconsistently."""


@dataclass(frozen=True, slots=True)
class HTTPError(StaticWebError):
    """An error that maps directly to an HTTP status code.

    Raised by the file server, the prefix stripper, or route handlers.
    The ASGI layer catches these and dispatches to the matching
    ``@app.error()`` handler, or renders a plain-text default.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — the path has no file behind it, or the prefix did not match."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """403 — the file exists but may not be served."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class RangeNotSatisfiable(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """416 — none of the requested byte ranges overlap the file."""

    def __init__(self, size: int, detail: str = "Requested Range Not Satisfiable") -> None:
        super().__init__(
            status=416,
            detail=detail,
            headers=(("Content-Range", f"bytes */{size}"),),
        )
