"""staticweb CLI — serve a directory over HTTP.

Entry point registered as ``staticweb`` in ``pyproject.toml``::

    [project.scripts]
    staticweb = "staticweb.cli:main"
"""

import argparse
import sys


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="staticweb",
        description="staticweb — serve static files with gzip, prefix stripping, and listing control.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- staticweb serve --------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a directory")
    serve_parser.add_argument("directory", help="Directory to serve")
    serve_parser.add_argument(
        "--path",
        dest="request_path",
        default=None,
        help="URL prefix (defaults to the directory as a web path)",
    )
    serve_parser.add_argument("--gzip", action="store_true", help="Compress responses")
    serve_parser.add_argument("--listing", action="store_true", help="Render directory listings")
    serve_parser.add_argument(
        "--no-strip-path",
        dest="strip_path",
        action="store_false",
        help="Resolve files with the URL prefix still on the path",
    )
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port number")
    serve_parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``staticweb`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from staticweb.cli._serve import serve

        serve(args)
