"""Routing — exception routes that take priority over static files.

``Route`` describes one route; ``Router`` compiles route patterns and
matches request paths against them.
"""

from staticweb.routing.route import Route, RouteMatch
from staticweb.routing.router import Router, compile_path

__all__ = ["Route", "RouteMatch", "Router", "compile_path"]
