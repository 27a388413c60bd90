"""
Command-Line Interface

Entry point for the mojang-metadata CLI tool.
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from . import __version__
from .api_clients import MojangAPI
from .config import NO_TIMESTAMP
from .config_loader import load_config, validate_config
from .exceptions import LookupFailed
from .futures import shutdown_default_executor
from .models import BlockedServerList, IdentityLookupResult, NameHistory, SkinInfo

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for CLI (stderr, so stdout stays machine-readable)"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def format_timestamp(timestamp: int) -> str:
    if timestamp == NO_TIMESTAMP:
        return "original"
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')


def format_result(result) -> str:
    """
    Render a typed result for the terminal

    Args:
        result: IdentityLookupResult, SkinInfo, NameHistory or BlockedServerList

    Returns:
        Printable text
    """
    if isinstance(result, IdentityLookupResult):
        return str(result.unique_id)

    if isinstance(result, SkinInfo):
        return "\n".join([
            f"id:        {result.id}",
            f"name:      {result.name}",
            f"value:     {result.value}",
            f"signature: {result.signature}",
        ])

    if isinstance(result, NameHistory):
        if not result.names:
            return f"No name history for {result.owner_id}"
        ordered = sorted(result.names.items(), key=lambda item: item[1])
        return "\n".join(f"{format_timestamp(ts):<24} {name}" for name, ts in ordered)

    if isinstance(result, BlockedServerList):
        return "\n".join(result.entries)

    raise TypeError(f"Cannot format {type(result).__name__}")


def run_lookup(client: MojangAPI, args: argparse.Namespace) -> int:
    """
    Run the selected lookup and print its result

    Args:
        client: MojangAPI instance
        args: Parsed CLI arguments

    Returns:
        Exit code (0 = success)
    """
    timeout = args.timeout

    if args.uuid:
        future = client.get_unique_id_json(args.uuid, timeout) if args.raw \
            else client.get_unique_id(args.uuid, timeout)
    elif args.skin:
        future = client.get_skin_info_json(args.skin, timeout) if args.raw \
            else client.get_skin_info(args.skin, timeout)
    elif args.history:
        future = client.get_name_history_json(args.history, timeout) if args.raw \
            else client.get_name_history(args.history, timeout)
    else:
        future = client.get_blocked_servers_text(timeout) if args.raw \
            else client.get_blocked_servers(timeout)

    try:
        result = future.result()
    except LookupFailed as e:
        logger.error(f"✗ {e}")
        return 1

    if args.raw:
        print(result if isinstance(result, str) else json.dumps(result, indent=2))
    else:
        print(format_result(result))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mojang-metadata",
        description=f"Mojang Metadata v{__version__} - Look up Minecraft profile data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve a player name to its UUID
  %(prog)s --uuid Notch

  # Show skin texture property
  %(prog)s --skin 069a79f4-44e9-4726-a5be-fca90e38aaf5

  # Print the raw JSON document instead of the decoded result
  %(prog)s --skin 069a79f444e94726a5befca90e38aaf5 --raw

  # List blocked server hashes with a 2 second connect timeout
  %(prog)s --blocked --timeout 2000
        """
    )

    lookup = parser.add_mutually_exclusive_group(required=True)
    lookup.add_argument("--uuid", metavar="NAME", help="Resolve a player name to its UUID")
    lookup.add_argument("--skin", metavar="UUID", help="Show skin texture info for a UUID")
    lookup.add_argument("--history", metavar="UUID", help="Show name history for a UUID")
    lookup.add_argument("--blocked", action="store_true", help="List blocked server hashes")

    parser.add_argument("--raw", action="store_true", help="Print the raw response document")
    parser.add_argument("--timeout", type=int, metavar="MS", help="Connect timeout in milliseconds")
    parser.add_argument("--config", type=Path, help="Path to config file (overrides default search paths)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config if args.config else None)

        is_valid, errors = validate_config(config)
        if not is_valid:
            logger.error("✗ Configuration validation failed:")
            for error in errors:
                logger.error(f"  - {error}")
            return 1

        client = MojangAPI.from_config(config)
        return run_lookup(client, args)

    except ValueError as e:
        logger.error(f"✗ Invalid argument: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("\n\nInterrupted by user")
        return 130
    finally:
        shutdown_default_executor(wait=False)


if __name__ == "__main__":
    sys.exit(main())
