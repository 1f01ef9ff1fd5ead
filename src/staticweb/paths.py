"""Path helpers shared by the builder and the CLI.

``to_web_path`` turns a configured system path into the URL prefix the
static handler strips. It is a narrow clean-up of *configured* paths, not
a traversal defence; containment of request paths is enforced by
``staticweb.filesystem.Dir``.
"""

import os

SLASH = "/"


def to_web_path(system_path: str) -> str:
    """Convert a system path into a canonical URL path.

    Backslashes become slashes, doubled slashes collapse to one, and every
    dot is removed::

        to_web_path("static\\\\css")   -> "static/css"
        to_web_path("./public")      -> "/public"
        to_web_path("assets//v1.2")  -> "assets/v12"

    Idempotent: ``to_web_path(to_web_path(p)) == to_web_path(p)``.
    """
    web_path = system_path.replace("\\", SLASH)
    # "/./" leaves "//" behind once the dots are gone
    web_path = web_path.replace(".", "")
    while SLASH + SLASH in web_path:
        web_path = web_path.replace(SLASH + SLASH, SLASH)
    return web_path


def abs_path(path: str | os.PathLike[str]) -> str:
    """Return the absolute form of *path*, or *path* itself if that fails."""
    try:
        return os.path.abspath(path)
    except (OSError, ValueError):
        return os.fspath(path)


def directory_exists(path: str | os.PathLike[str]) -> bool:
    """Return False only if *path* does not exist.

    Other stat failures (permissions, I/O) count as "exists" so callers
    surface the real error when they try to read from it.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True
