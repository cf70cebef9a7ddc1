"""Watch a vault and re-process documents when they change."""

from __future__ import annotations

import time
from pathlib import Path

from loguru import logger
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ..core.exceptions import TaskPropError
from ..sources.filesystem import FileSystemDocumentStore
from .guard import Debouncer, ProcessingGuard
from .processor import TaskPropertyProcessor


class VaultWatcher:
    """Routes filesystem change events to the processor.

    Events for a document are debounced, and documents that are being
    processed or have just been written by us are ignored.

    Example:
        watcher = VaultWatcher(store, processor, debounce_delay=1.0, cooldown=0.2)
        watcher.run()  # blocks until Ctrl+C
    """

    def __init__(
        self,
        store: FileSystemDocumentStore,
        processor: TaskPropertyProcessor,
        debounce_delay: float = 1.0,
        cooldown: float = 0.2,
    ) -> None:
        self._store = store
        self._processor = processor
        self._guard = ProcessingGuard(cooldown=cooldown)
        self._debouncer = Debouncer(self.process, delay=debounce_delay)
        self._observer = None

    @property
    def guard(self) -> ProcessingGuard:
        return self._guard

    def on_path_changed(self, path: Path | str) -> bool:
        """Handle a change to a filesystem path.

        Returns:
            True if processing was scheduled for the path.
        """
        doc_id = self._store.doc_id_for(path)
        if doc_id is None or not self._store.includes(doc_id):
            return False
        if self._guard.is_busy(doc_id):
            logger.debug(f"Ignoring change to busy document: {doc_id}")
            return False
        self._debouncer.trigger(doc_id)
        return True

    def process(self, doc_id: str) -> None:
        """Process a document unless a pass is already running for it."""
        with self._guard.hold(doc_id) as acquired:
            if not acquired:
                logger.debug(f"Skipping {doc_id}: already in flight")
                return
            try:
                result = self._processor.process_document(doc_id)
            except TaskPropError as e:
                logger.warning(f"Failed to process {doc_id}: {e}")
                return
            if result.changed:
                logger.info(f"Updated frontmatter: {doc_id}")

    def start(self) -> None:
        """Start watching the vault in a background thread."""
        observer = Observer()
        observer.schedule(_VaultEventHandler(self), str(self._store.base_path), recursive=True)
        observer.start()
        self._observer = observer
        logger.info(f"Watching {self._store.base_path}")

    def stop(self) -> None:
        """Stop watching and cancel pending work."""
        self._debouncer.cancel_all()
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None
        logger.info("Watcher stopped")

    def run(self) -> None:
        """Watch until interrupted."""
        self.start()
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            self.stop()


class _VaultEventHandler(FileSystemEventHandler):
    def __init__(self, watcher: VaultWatcher) -> None:
        self._watcher = watcher

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.on_path_changed(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.on_path_changed(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._watcher.on_path_changed(event.dest_path)
