"""Typed captures for route patterns.

``{name}`` captures one path segment as ``str``; ``{name:int}`` and
``{name:float}`` convert it; ``{name:path}`` captures the rest of the
path, slashes included.
"""

from collections.abc import Mapping
from typing import Any

# converter name -> (regex, python type)
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(value: str, param_type: str) -> Any:
    """Convert one captured string. Unknown converters raise ``KeyError``."""
    return CONVERTERS[param_type][1](value)


def convert_params(types: Mapping[str, str], params: Mapping[str, str]) -> dict[str, Any]:
    """Convert every capture in *params* using its declared type."""
    return {name: convert_param(value, types.get(name, "str")) for name, value in params.items()}
