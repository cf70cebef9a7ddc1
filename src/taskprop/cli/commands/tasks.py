"""Inspection commands for taskprop CLI.

- `taskprop tasks FILE`: show the tasks parsed from a file
- `taskprop resolve FILE`: show the frontmatter updates a file would get
"""

import json
from dataclasses import asdict
from pathlib import Path

from ...core.config import Config
from ...core.exceptions import DocumentError, DocumentNotFoundError
from ...services.resolver import resolve_updates
from ...tasks import parse_document


def add_file_arguments(parser) -> None:
    """Add arguments for commands that inspect a single file.

    Args:
        parser: Argument parser for the command.
    """
    parser.add_argument("file", help="Markdown file to inspect")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of text",
    )


def handle_tasks(args, config: Config) -> None:
    """Handle tasks command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    tasks = parse_document(_read_file(args.file))

    if args.json:
        print(json.dumps([asdict(t) for t in tasks], ensure_ascii=False, indent=2))
        return

    if not tasks:
        print("No tasks found.")
        return

    for task in tasks:
        mark = "x" if task.is_done else task.status
        print(f"{task.line_number + 1:>5}  [{mark}] {task.description}")
        fields = [
            (name, value)
            for name, value in (
                ("due", task.due_date),
                ("scheduled", task.scheduled_date),
                ("start", task.start_date),
                ("created", task.created_date),
                ("done", task.done_date),
                ("priority", task.priority),
                ("recurrence", task.recurrence),
            )
            if value
        ]
        if fields:
            print("       " + ", ".join(f"{name}={value}" for name, value in fields))


def handle_resolve(args, config: Config) -> None:
    """Handle resolve command (dry run, nothing is written).

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    tasks = parse_document(_read_file(args.file))
    updates = resolve_updates(tasks, config.rules())

    if args.json:
        print(json.dumps([asdict(u) for u in updates], ensure_ascii=False, indent=2))
        return

    if not updates:
        print("No updates.")
        return

    for update in updates:
        policy = "overwrite" if update.overwrite_existing else "keep existing"
        print(f"{update.key}: {update.value}  ({policy})")


def _read_file(file: str) -> str:
    path = Path(file).expanduser()
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DocumentNotFoundError(str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"Failed to read {path}: {e}") from e
