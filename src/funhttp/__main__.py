"""
=============================================================================
FUNHTTP CLI ENTRY POINT
=============================================================================

    # Run with defaults (127.0.0.1:9000, pages from ./www)
    python -m funhttp

    # Custom port, listen on all interfaces
    python -m funhttp --host 0.0.0.0 --port 8080

    # One thread per connection instead of one connection at a time
    python -m funhttp --concurrent

    # Live weather data instead of the mock payload
    OPENWEATHER_API_KEY=... python -m funhttp

Command-line flags override environment variables, which override the
defaults in ServerConfig.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig
from .server import HTTPServer


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="funhttp",
        description="Minimal HTTP origin server built on raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m funhttp                       # Run with defaults
  python -m funhttp --port 8080           # Custom port
  python -m funhttp --host 0.0.0.0        # Listen on all interfaces
  python -m funhttp --www ./public        # Pages from another directory
  python -m funhttp --concurrent          # Thread per connection
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )

    parser.add_argument(
        "--concurrent",
        action="store_true",
        default=defaults.concurrent,
        help="Handle each connection in its own thread"
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONTENT / LOGGING
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--www", "-d",
        default=defaults.www_dir,
        help=f"Directory with root.html and index.html (default: {defaults.www_dir})"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level.upper(),
        help=f"Logging level (default: {defaults.log_level.upper()})"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"funhttp {__version__}"
    )

    return parser


def main(argv=None):
    """Parse arguments, build the configuration and run the server."""
    defaults = ServerConfig.from_env()
    args = build_parser(defaults).parse_args(argv)

    defaults.host = args.host
    defaults.port = args.port
    defaults.concurrent = args.concurrent
    defaults.www_dir = args.www
    defaults.log_level = args.log_level

    try:
        server = HTTPServer(defaults)
        server.run()
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
