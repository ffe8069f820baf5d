"""Entrypoint that serves the practice page."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .config import DEFAULT_DRAW_SIZE, DEFAULT_HOST, DEFAULT_PORT, AppConfig
from .exporter import DEFAULT_EXPORT_FILENAME
from .web import create_app

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="topicdrill", description="Subject practice tracker")
    parser.add_argument("--catalog", type=Path, default=None, help="catalog JSON file (bundled sample if omitted)")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--draw-size", type=int, default=DEFAULT_DRAW_SIZE, help="items shown per draw")
    parser.add_argument("--export-name", default=DEFAULT_EXPORT_FILENAME, help="download name for saved catalogs")
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> AppConfig:
    """Translate parsed arguments into app configuration."""
    if args.draw_size < 0:
        raise ValueError("--draw-size must not be negative")
    return AppConfig(
        catalog_path=args.catalog,
        export_filename=args.export_name,
        draw_size=args.draw_size,
        host=args.host,
        port=args.port,
    )


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, load the catalog and serve the page until interrupted."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    app = create_app(config)
    # One shared session; handlers must not run concurrently.
    app.run(host=config.host, port=config.port, threaded=False)
    return 0


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
