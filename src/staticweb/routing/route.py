"""Exception route and match result."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A handler that answers one path pattern before the static files do.

    Patterns are matched against the full request path, prefix included.
    Segments in braces capture a value, optionally typed::

        Route("/static/version.json", version)
        Route("/static/users/{id:int}", user)
        Route("/static/upload", upload, methods=frozenset({"POST"}))

    Only GET is routed by default; a GET route also answers HEAD.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str] = field(default=frozenset({"GET"}))
    name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", frozenset(m.upper() for m in self.methods))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """A matched route with its captured values.

    ``path_params`` holds the raw strings; ``values`` holds them
    converted to the types declared in the pattern.
    """

    route: Route
    path_params: dict[str, str]
    values: dict[str, Any]
