"""Command-line entrypoint that runs the registry under uvicorn."""

import argparse
import logging

import uvicorn

from session_registry.api.app import create_app
from session_registry.config import Settings, parse_log_level
from session_registry.containers import build_container

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line overrides for the environment settings."""
    parser = argparse.ArgumentParser(description="Election session registry")
    parser.add_argument("--host", type=str, help="Address the server binds to")
    parser.add_argument(
        "--port", type=int, help="Port number the server should listen on"
    )
    parser.add_argument(
        "--level",
        type=int,
        help="Minimum level of logs to output (0 -> 3)",
    )
    parser.add_argument("--dir", type=str, help="Directory holding session files")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Merge parsed arguments over settings loaded from the environment."""
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.level is not None:
        overrides["log_level"] = args.level
    if args.dir is not None:
        overrides["session_dir"] = args.dir
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> None:
    """Start the registry server; uvicorn handles SIGINT/SIGTERM shutdown."""
    settings = build_settings(parse_args(argv))
    app = create_app(build_container(settings))
    logger.info("server startup initiated on %s:%d", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=logging.getLevelName(parse_log_level(settings.log_level)).lower(),
    )


if __name__ == "__main__":
    main()
