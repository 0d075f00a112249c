"""Command-line interface for the issue tracker."""

import argparse
import sys
from typing import Optional

from issuetracker.config import ServerConfig, configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="issuetracker",
        description="Per-project issue tracker served as a JSON API",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from ISSUETRACKER_LOG_LEVEL env or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Web command
    web_parser = subparsers.add_parser("web", help="Start the API server")
    web_parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (default: from ISSUETRACKER_HOST env or 0.0.0.0)",
    )
    web_parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Port to bind to (default: from ISSUETRACKER_PORT env or 7760)",
    )
    web_parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Waitress worker threads (default: from ISSUETRACKER_THREADS env or 4)",
    )
    web_parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable debug mode (uses Flask dev server)",
    )

    return parser


def load_config(args: argparse.Namespace) -> ServerConfig:
    """Merge environment settings with command-line overrides."""
    return ServerConfig.from_env().override(
        host=getattr(args, "host", None),
        port=getattr(args, "port", None),
        threads=getattr(args, "threads", None),
        debug=getattr(args, "debug", None),
        log_level=args.log_level,
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args)
        configure_logging(config.log_level)

        if args.command == "web":
            from issuetracker.web import run_server

            run_server(config)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr, flush=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
