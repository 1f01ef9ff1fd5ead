"""``staticweb serve`` — serve a directory with uvicorn."""

import argparse
import logging
import sys

from staticweb.app import App
from staticweb.config import ServeConfig
from staticweb.paths import directory_exists


def config_from_args(args: argparse.Namespace) -> ServeConfig:
    """Collect parsed CLI arguments into a ServeConfig."""
    return ServeConfig(
        directory=args.directory,
        request_path=args.request_path,
        strip_path=args.strip_path,
        gzip=args.gzip,
        listing=args.listing,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


def serve(args: argparse.Namespace) -> None:
    """Validate the directory, configure logging, and run the server."""
    config = config_from_args(args)

    if not directory_exists(config.directory):
        print(f"Error: directory {str(config.directory)!r} does not exist", file=sys.stderr)
        raise SystemExit(1)

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = App(config.builder())
    try:
        app.run(config.host, config.port, log_level=config.log_level)
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
