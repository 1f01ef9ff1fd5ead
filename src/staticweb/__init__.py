"""staticweb — static file serving for ASGI.

Serves a directory with optional gzip, prefix stripping, directory
listing control, and exception routes that take priority over files.

Basic usage::

    from staticweb import App, StaticHandlerBuilder

    app = App(
        StaticHandlerBuilder("./public")
        .path("/static")
        .gzip(True)
    )

    app.run()

Or drive the handler directly::

    handler = StaticHandlerBuilder("./public").path("/").build()
    response = await handler(request)
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "ConfigurationError",
    "Dir",
    "FileServer",
    "Forbidden",
    "HTTPError",
    "ListingFileSystem",
    "MethodNotAllowed",
    "NotFound",
    "Redirect",
    "Request",
    "Response",
    "Route",
    "ServeConfig",
    "StaticHandlerBuilder",
    "StaticWebError",
    "static_handler",
    "static_web",
    "to_web_path",
    "type_by_extension",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import staticweb`` fast (anyio is only loaded when the
    file server is) while providing a clean top-level API.
    """
    if name == "App":
        from staticweb.app import App

        return App

    if name in ("StaticHandlerBuilder", "static_handler", "static_web"):
        from staticweb import builder as _builder

        return getattr(_builder, name)

    if name == "ServeConfig":
        from staticweb.config import ServeConfig

        return ServeConfig

    if name == "FileServer":
        from staticweb.fileserver import FileServer

        return FileServer

    if name in ("Dir", "ListingFileSystem"):
        from staticweb import filesystem as _fs

        return getattr(_fs, name)

    if name == "Request":
        from staticweb.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from staticweb.http import response as _resp

        return getattr(_resp, name)

    if name == "Route":
        from staticweb.routing.route import Route

        return Route

    if name == "to_web_path":
        from staticweb.paths import to_web_path

        return to_web_path

    if name == "type_by_extension":
        from staticweb.mime import type_by_extension

        return type_by_extension

    if name in (
        "ConfigurationError",
        "Forbidden",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "StaticWebError",
    ):
        from staticweb import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
