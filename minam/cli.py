"""Command-line entry point that serves the Minam API."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from minam.config import server_settings
from minam.logging_config import configure_logging
from minam.webapp import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minam", description="Run the Minam data-to-API registry."
    )
    parser.add_argument("--host", help="Bind address (default: MINAM_HOST or 0.0.0.0)")
    parser.add_argument(
        "--port", type=int, help="Listen port (default: MINAM_PORT or 8787)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    settings = server_settings()
    host = args.host or settings.host
    port = args.port if args.port is not None else settings.port

    app = create_app()
    logger.info("Minam API running on http://%s:%d/", host, port)
    print(f"Minam API running on http://{host}:{port}/")
    app.run(host=host, port=port, debug=args.debug, threaded=True)
    return 0
