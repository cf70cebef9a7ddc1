"""CLI entry point for taskprop."""

import argparse
import os
import sys
from pathlib import Path
from typing import NoReturn

from loguru import logger

from ..core.config import Config
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="taskprop",
        description="Task Property Sync - Keep frontmatter in sync with task metadata",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")
    parser.add_argument("-c", "--config", help="Path to TOML config file")
    parser.add_argument("--vault", help="Vault directory (overrides config)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    tasks_parser = subparsers.add_parser("tasks", help="Show tasks parsed from a file")
    commands.add_file_arguments(tasks_parser)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Show frontmatter updates for a file (dry run)"
    )
    commands.add_file_arguments(resolve_parser)

    process_parser = subparsers.add_parser("process", help="Sync one file in the vault")
    process_parser.add_argument("file", help="Markdown file inside the vault")

    subparsers.add_parser("process-all", help="Sync every file in the vault")

    watch_parser = subparsers.add_parser("watch", help="Sync files as they change")
    watch_parser.add_argument(
        "--initial",
        action="store_true",
        help="Process all files before watching",
    )

    return parser


def configure_logging(verbose: bool = False) -> None:
    """Send loguru output to stderr at the requested level."""
    level = "DEBUG" if verbose else os.environ.get("TASKPROP_LOG_LEVEL", "INFO")
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def load_config(args) -> Config:
    """Load configuration and apply command line overrides."""
    config = Config.from_env_or_file(args.config)
    if args.vault:
        config.vault_path = Path(args.vault).expanduser()
    return config


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args)

        if args.command == "tasks":
            commands.handle_tasks(args, config)
        elif args.command == "resolve":
            commands.handle_resolve(args, config)
        elif args.command == "process":
            commands.handle_process(args, config)
        elif args.command == "process-all":
            commands.handle_process_all(args, config)
        elif args.command == "watch":
            commands.handle_watch(args, config)
        else:
            parser.print_help()

        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
