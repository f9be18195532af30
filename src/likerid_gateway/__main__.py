"""Entry point for running the gateway directly."""

import argparse
import sys
from typing import Optional

import uvicorn

from likerid_gateway.app import create_app
from likerid_gateway.core.config import Settings
from likerid_gateway.utils.exceptions import ConfigurationError


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line options. Unset options fall back to the environment."""
    parser = argparse.ArgumentParser(
        prog="likerid-gateway",
        description="CCIP-Read gateway serving signed LikerID ENS records",
    )
    parser.add_argument(
        "-k",
        "--private-key",
        help="Private key to sign responses with. Prefix with @ to read from a file",
    )
    parser.add_argument(
        "-D",
        "--development",
        action="store_true",
        default=None,
        help="Use the test network",
    )
    parser.add_argument("-t", "--ttl", type=int, help="TTL for signatures")
    parser.add_argument("-p", "--port", type=int, help="Port number to serve on")
    parser.add_argument("--host", help="Interface to bind to")

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge command line options over environment settings."""
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return Settings(**overrides)


def main(argv: Optional[list[str]] = None):
    """Run the application."""
    settings = build_settings(parse_args(argv))

    try:
        _ = settings.signing_key
    except ConfigurationError as e:
        sys.exit(f"Invalid signing key: {e}")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="warning",
    )


if __name__ == "__main__":
    main()
