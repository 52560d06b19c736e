"""Command-line entrypoint running the API with uvicorn.

Example:
    distmock --port 8000
    python -m distmock --no-seed --log-level debug
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from .core.config import HOST, LOG_LEVEL, PORT
from .main import create_app
from .seed import seed_sample_data
from .store import Store

logger = logging.getLogger(__name__)


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError("port must be an integer") from e
    if not (0 <= port <= 65535):
        raise argparse.ArgumentTypeError("port must be between 0 and 65535")
    return port


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="In-memory content-distribution API server")
    parser.add_argument("--host", default=HOST, help=f"Interface to bind (default: {HOST})")
    parser.add_argument(
        "--port",
        type=_port,
        default=PORT or 8000,
        help="Port to listen on (default: DISTMOCK_PORT or 8000)",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Start with an empty store instead of the sample catalogue",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help=f"Logging level (default: {LOG_LEVEL})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = Store() if args.no_seed else seed_sample_data()
    app = create_app(store)
    logger.info("Starting distmock on %s:%d", args.host, args.port)
    try:
        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            log_config=None,
            log_level=args.log_level.lower(),
            access_log=False,
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt. Shutting down...")
        return 130
    return 0
