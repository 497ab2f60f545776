"""Main CLI entry point for manifestinfo.

Provides commands: export, show
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from manifestinfo.cli.export import export_command
from manifestinfo.cli.show import show_command

logger = logging.getLogger("manifestinfo.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="manifestinfo",
        description="Manifestinfo - build manifest summaries of resolved package graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    config_help = (
        "Optional configuration. Can be a path to a TOML/JSON file "
        "(e.g. manifestinfo.toml) or an inline TOML/JSON string. "
        "When omitted, built-in defaults are used."
    )

    # Export command
    export_parser = subparsers.add_parser(
        "export",
        help="Write the manifest summary of a package graph as JSON",
    )
    export_parser.add_argument(
        "graph",
        help="Package graph file (package description document or saved node-link graph)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output JSON file, or '-' for standard output",
    )
    export_parser.add_argument("-c", "--config", help=config_help)
    export_parser.add_argument(
        "--sort",
        action="store_true",
        help="Order products and targets by package identity and name",
    )

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Display products and targets with their build-system names",
    )
    show_parser.add_argument(
        "graph",
        help="Package graph file (package description document or saved node-link graph)",
    )
    show_parser.add_argument("-c", "--config", help=config_help)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "export":
        return export_command(args)
    elif args.command == "show":
        return show_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
