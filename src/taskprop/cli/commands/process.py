"""Processing commands for taskprop CLI.

- `taskprop process FILE`: sync one document's frontmatter
- `taskprop process-all`: sync every document in the vault
- `taskprop watch`: sync documents as they change
"""

from pathlib import Path

from loguru import logger

from ...core.config import Config
from ...core.exceptions import DocumentError
from ...services import TaskPropertyProcessor, VaultWatcher
from ...sources import FileSystemDocumentStore
from ...store import FrontmatterWriter


def build_processor(config: Config) -> tuple[FileSystemDocumentStore, TaskPropertyProcessor]:
    """Create the store and processor for the configured vault.

    Args:
        config: Application configuration.

    Returns:
        Tuple of (store, processor).
    """
    store = FileSystemDocumentStore(
        config.vault_path,
        glob_patterns=config.glob_patterns,
        excluded_folders=config.excluded_folders,
    )
    processor = TaskPropertyProcessor(
        store,
        FrontmatterWriter(store),
        config.rules,
        is_included=store.includes,
    )
    return store, processor


def handle_process(args, config: Config) -> None:
    """Handle process command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    store, processor = build_processor(config)

    doc_id = store.doc_id_for(Path(args.file))
    if doc_id is None:
        raise DocumentError(f"{args.file} is not inside the vault {store.base_path}")

    result = processor.process_document(doc_id)
    if result.skipped:
        print(f"{doc_id}: skipped")
    elif result.changed:
        print(f"{doc_id}: updated {len(result.updates)} properties from {result.task_count} tasks")
    else:
        print(f"{doc_id}: up to date")


def handle_process_all(args, config: Config) -> None:
    """Handle process-all command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    _, processor = build_processor(config)
    batch = processor.process_all()

    print(f"Processed {batch.processed} files ({batch.changed} changed).")
    for doc_id, error in batch.errors:
        print(f"  ! {doc_id}: {error}")


def handle_watch(args, config: Config) -> None:
    """Handle watch command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    if not config.process_on_modify:
        logger.warning("process_on_modify is disabled; nothing to watch")
        return

    store, processor = build_processor(config)
    if args.initial:
        processor.process_all()

    watcher = VaultWatcher(
        store,
        processor,
        debounce_delay=config.debounce_delay,
        cooldown=config.cooldown,
    )
    print(f"Watching {store.base_path} (Ctrl+C to quit)")
    watcher.run()
