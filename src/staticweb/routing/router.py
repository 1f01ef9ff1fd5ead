"""Route matching for exception routes.

Each route pattern compiles to one regular expression. Matching tries
patterns from most to least specific (more literal segments first,
registration order breaking ties) and takes the first one that accepts
both the path and the method.
"""

import re
from dataclasses import dataclass

from staticweb.errors import MethodNotAllowed, NotFound
from staticweb.routing.params import CONVERTERS, convert_params
from staticweb.routing.route import Route, RouteMatch

_CAPTURE = re.compile(r"^\{(?P<name>\w+)(?::(?P<type>\w+))?\}$")


def _segments(path: str) -> list[str]:
    return [part for part in path.split("/") if part]


def compile_path(path: str) -> tuple[re.Pattern[str], dict[str, str], int]:
    """Compile a route pattern.

    Returns the regex, the declared type of each capture, and the number
    of literal segments::

        compile_path("/users/{id:int}")
        -> (re.compile(r"users/(?P<id>\\d+)"), {"id": "int"}, 1)

    Raises ``KeyError`` for an unknown converter name.
    """
    parts: list[str] = []
    types: dict[str, str] = {}
    literals = 0
    for segment in _segments(path):
        capture = _CAPTURE.match(segment)
        if capture is None:
            parts.append(re.escape(segment))
            literals += 1
            continue
        name = capture["name"]
        param_type = capture["type"] or "str"
        pattern, _ = CONVERTERS[param_type]
        types[name] = param_type
        parts.append(f"(?P<{name}>{pattern})")
    return re.compile("/".join(parts)), types, literals


@dataclass(frozen=True, slots=True)
class _Entry:
    route: Route
    pattern: re.Pattern[str]
    types: dict[str, str]
    literals: int


class Router:
    """Matches request paths against a fixed set of routes.

    Usage::

        router = Router()
        router.add(Route("/static/version.json", version))
        router.compile()
        match = router.match("GET", "/static/version.json")
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        self._entries: list[_Entry] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        pattern, types, literals = compile_path(route.path)
        self._entries.append(_Entry(route, pattern, types, literals))

    def compile(self) -> None:
        """Order routes by specificity and stop accepting new ones."""
        self._entries.sort(key=lambda entry: -entry.literals)
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the route for *method* and *path*.

        Raises ``NotFound`` if no pattern matches the path, and
        ``MethodNotAllowed`` if some do but none for this method.
        """
        target = "/".join(_segments(path))
        allowed: set[str] = set()
        for entry in self._entries:
            found = entry.pattern.fullmatch(target)
            if found is None:
                continue
            methods = entry.route.methods
            if method in methods or (method == "HEAD" and "GET" in methods):
                params = found.groupdict()
                return RouteMatch(
                    route=entry.route,
                    path_params=params,
                    values=convert_params(entry.types, params),
                )
            allowed.update(methods)

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))
        raise NotFound(f"No route matches {method} {path!r}")
