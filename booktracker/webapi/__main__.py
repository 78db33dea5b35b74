"""Serve the booktracker API with uvicorn: ``python -m booktracker.webapi``."""

from __future__ import annotations

import argparse
from typing import Sequence

import uvicorn

from ..config_manager import get_settings

APP_FACTORY = "booktracker.webapi.application:create_app"


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="python -m booktracker.webapi",
        description="Serve the booktracker HTTP API.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: %(default)s)")
    parser.add_argument("--port", type=int, default=8080, help="Bind port (default: %(default)s)")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level.lower(),
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn log level; defaults to BOOKTRACKER_LOG_LEVEL.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
