"""
CLI main entry point for the Invader Comparator.

Thin wrapper around the core library - no business logic here.
"""

import argparse
import os
import sys
from pathlib import Path

from loguru import logger

from comparator import ComparisonRunner
from comparator.registry import DEFAULT_REGISTRY_PATH, JSONFileRegistry, RegistryError
from comparator.storage import FileStorage, StorageError

from .output import print_report, print_uids

ENV_REGISTRY = "INVADER_REGISTRY"
ENV_PLAYERS = "INVADER_PLAYERS"


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="invader-compare",
        description="Find the invaders other players own that a reference player is missing.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s compare REF_UID UID1 UID2
  %(prog)s compare --filter PA --format json
  %(prog)s uids set-mine REF_UID
  %(prog)s uids add UID1
        """,
    )

    parser.add_argument(
        "--registry",
        type=str,
        default=None,
        help=f"UID registry file (default: ${ENV_REGISTRY} or {DEFAULT_REGISTRY_PATH})",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    compare = subparsers.add_parser("compare", help="Compare player galleries")
    compare.add_argument(
        "reference_uid",
        nargs="?",
        default=None,
        help="Reference player UID (default: from registry or $INVADER_PLAYERS)",
    )
    compare.add_argument(
        "other_uids",
        nargs="*",
        help="UIDs to compare against the reference",
    )
    compare.add_argument(
        "--filter",
        type=str,
        default=None,
        help="Only show invaders containing this text (case-insensitive)",
    )
    compare.add_argument(
        "-o",
        "--output-dir",
        type=str,
        default=".",
        help="Directory to save output files (default: current directory)",
    )
    compare.add_argument(
        "-f",
        "--format",
        type=str,
        choices=["csv", "json"],
        default="csv",
        help="Output format (default: csv)",
    )
    compare.add_argument(
        "--no-save",
        action="store_true",
        help="Print the report without saving it",
    )
    compare.add_argument(
        "-c",
        "--concurrency",
        type=int,
        default=3,
        help="Maximum number of galleries to fetch concurrently (default: 3)",
    )
    compare.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=30,
        help="Timeout in seconds for each gallery fetch (default: 30)",
    )
    compare.add_argument(
        "--user-agent",
        type=str,
        default=None,
        help="Custom User-Agent header (optional)",
    )

    uids = subparsers.add_parser("uids", help="Manage the UID registry")
    uids_commands = uids.add_subparsers(dest="uids_command", required=True)
    uids_commands.add_parser("show", help="Show registered UIDs")
    set_mine = uids_commands.add_parser("set-mine", help="Set the reference UID")
    set_mine.add_argument("uid")
    add = uids_commands.add_parser("add", help="Add a UID to compare against")
    add.add_argument("uid")
    remove = uids_commands.add_parser("remove", help="Remove a UID to compare against")
    remove.add_argument("uid")
    set_others = uids_commands.add_parser("set", help="Replace all UIDs to compare against")
    set_others.add_argument("uids", nargs="*")

    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def registry_path(args: argparse.Namespace) -> Path:
    """Resolve the registry path: flag, then environment, then default."""
    if args.registry:
        return Path(args.registry)
    if os.environ.get(ENV_REGISTRY):
        return Path(os.environ[ENV_REGISTRY])
    return DEFAULT_REGISTRY_PATH


def resolve_uids(args: argparse.Namespace) -> tuple[str, list[str]]:
    """
    Work out which players to compare.

    Precedence: UIDs on the command line, an explicit --registry file,
    $INVADER_PLAYERS (first UID is the reference), then the registry at
    $INVADER_REGISTRY or the default path.

    Raises:
        RegistryError: If the registry file cannot be read
    """
    if args.reference_uid is not None:
        return args.reference_uid.strip(), list(args.other_uids)

    players_env = os.environ.get(ENV_PLAYERS, "")
    if not args.registry and players_env.strip():
        uids = [uid.strip() for uid in players_env.split(",") if uid.strip()]
        return uids[0], uids[1:]

    uids = JSONFileRegistry(registry_path(args)).load()
    return uids.my_uid, list(uids.others_uids)


def run_compare(args: argparse.Namespace) -> None:
    """Run a comparison, print it and optionally save it."""
    try:
        reference_uid, other_uids = resolve_uids(args)
    except RegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not reference_uid:
        print("Error: No reference UID given or registered", file=sys.stderr)
        sys.exit(1)
    if not other_uids:
        print("Error: No UIDs to compare against", file=sys.stderr)
        sys.exit(1)

    runner = ComparisonRunner(
        max_concurrency=args.concurrency,
        fetch_timeout=args.timeout * 1000,  # Convert to milliseconds
        user_agent=args.user_agent,
    )

    print(f"Comparing {reference_uid} against {len(other_uids)} player(s)...")
    report = runner.run(reference_uid, other_uids, filter_term=args.filter)

    print_report(report)

    if not args.no_save:
        print(f"\nSaving results to {args.format.upper()} file...")
        storage = FileStorage(output_directory=args.output_dir)

        try:
            output_path = storage.save(report, format=args.format)
            print(f"✓ Results saved to: {output_path}")
        except StorageError as e:
            print(f"✗ Failed to save results: {e}", file=sys.stderr)
            sys.exit(1)

    # Exit with error code if any gallery failed to load
    if report.players_failed > 0:
        sys.exit(1)


def run_uids(args: argparse.Namespace) -> None:
    """Show or edit the UID registry."""
    registry = JSONFileRegistry(registry_path(args))

    try:
        if args.uids_command == "show":
            uids = registry.load()
        elif args.uids_command == "set-mine":
            uids = registry.set_my_uid(args.uid)
        elif args.uids_command == "add":
            uids = registry.add_other_uid(args.uid)
        elif args.uids_command == "remove":
            uids = registry.remove_other_uid(args.uid)
        else:  # set
            uids = registry.set_others_uids(list(args.uids))
    except RegistryError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_uids(uids)


def main(argv: list[str] | None = None) -> None:
    """
    Main CLI entry point.

    Parses arguments, configures logging and dispatches to the
    requested command.
    """
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    if args.command == "compare":
        run_compare(args)
    else:
        run_uids(args)


if __name__ == "__main__":
    main()
