"""
=============================================================================
WAITER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on localhost:4000
    python -m waiter

    # Custom address
    waiter --address 0.0.0.0:8080
    waiter -a 127.0.0.1:9000

    # Chattier logs
    waiter --log-level DEBUG

Files are always served from the current working directory, so cd into
the site first.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import DEFAULT_ADDRESS, LOG_LEVELS, ServerConfig
from .server import WaiterServer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waiter",
        description="Serve the current directory, with htmd content negotiation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  waiter                          # localhost:4000
  waiter --address 0.0.0.0:8080   # all interfaces, port 8080
        """
    )

    parser.add_argument(
        "--address", "-a",
        default=DEFAULT_ADDRESS,
        help=f"Address for the server to run on (default: {DEFAULT_ADDRESS})"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS[:-1],
        default="INFO",
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"waiter {__version__}"
    )

    return parser


def main(argv=None) -> int:
    """
    Main CLI entry point.

    Returns the process exit status: 0 after a clean stop, 1 when the
    address is invalid or cannot be bound.
    """
    args = build_parser().parse_args(argv)

    config = ServerConfig(address=args.address, log_level=args.log_level)

    try:
        server = WaiterServer(config)
        server.setup_logging()
        server.bind()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
