# Main Entry Point
#
# Starts the API server by default.
# Use --check-password to score a single password and exit.

import argparse
import sys

from . import __version__
from .core import get_audit_logger, EventType, EventSeverity
from .vault import evaluate_strength


def _print_strength(secret: str) -> None:
    result = evaluate_strength(secret)
    print(f"Score:    {result.score}/6")
    print(f"Category: {result.category.value}")
    for hint in result.feedback:
        print(f"  - {hint}")


def main(argv=None):
    """Main entry point for VaultWatch."""
    parser = argparse.ArgumentParser(
        description="VaultWatch - credential vault with security analysis",
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="API host (default: 127.0.0.1)"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="API port (default: 8080)"
    )

    parser.add_argument(
        "--check-password",
        metavar="PASSWORD",
        help="Print the strength of PASSWORD and exit"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"VaultWatch v{__version__}"
    )

    args = parser.parse_args(argv)

    if args.check_password is not None:
        _print_strength(args.check_password)
        return 0

    get_audit_logger().log_event(
        event_type=EventType.SYSTEM_START,
        severity=EventSeverity.INFO,
        message="VaultWatch starting",
        details={"version": __version__, "host": args.host, "port": args.port}
    )

    from .api.main import start_api_server

    try:
        start_api_server(host=args.host, port=args.port)
    except KeyboardInterrupt:
        print("\n\nShutting down...")
        get_audit_logger().log_event(
            event_type=EventType.SYSTEM_STOP,
            severity=EventSeverity.INFO,
            message="VaultWatch stopped (user interrupt)"
        )
        return 0
    except Exception as e:
        print(f"\n\nError: {str(e)}")
        get_audit_logger().log_event(
            event_type=EventType.SYSTEM_STOP,
            severity=EventSeverity.CRITICAL,
            message=f"VaultWatch crashed: {str(e)}"
        )
        return 1

    get_audit_logger().log_event(
        event_type=EventType.SYSTEM_STOP,
        severity=EventSeverity.INFO,
        message="VaultWatch stopped"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
