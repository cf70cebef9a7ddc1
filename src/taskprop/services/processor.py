"""Processing service that keeps frontmatter in sync with tasks."""

from __future__ import annotations

import time
from typing import Callable

from loguru import logger

from ..app.protocols import DocumentStoreProtocol, FrontmatterWriterProtocol
from ..core.exceptions import TaskPropError
from ..core.types import BatchResult, ProcessResult, RuleSet
from ..tasks import parse_document
from .resolver import requires_resolution, resolve_updates


class TaskPropertyProcessor:
    """Parses tasks, resolves mappings and writes frontmatter updates.

    Rules are read through a callable on every pass, so configuration
    reloads take effect without rebuilding the processor and a pass never
    sees a half-updated rule set.

    Example:
        store = FileSystemDocumentStore(config.vault_path)
        processor = TaskPropertyProcessor(store, FrontmatterWriter(store), config.rules)
        result = processor.process_document("projects/plan.md")
        print(f"{result.task_count} tasks, changed={result.changed}")
    """

    def __init__(
        self,
        store: DocumentStoreProtocol,
        writer: FrontmatterWriterProtocol,
        rules: RuleSet | Callable[[], RuleSet],
        is_included: Callable[[str], bool] | None = None,
    ):
        """Initialize TaskPropertyProcessor.

        Args:
            store: Source of document text and listings.
            writer: Frontmatter writer receiving the updates.
            rules: Rule snapshot, or a callable returning the current one.
            is_included: Optional predicate deciding whether a document id
                may be processed (e.g. excluded folders).
        """
        self._store = store
        self._writer = writer
        self._rules = rules if callable(rules) else (lambda: rules)
        self._is_included = is_included

    def process_document(self, doc_id: str) -> ProcessResult:
        """Process a single document.

        Args:
            doc_id: Document identifier in the store.

        Returns:
            ProcessResult describing what happened.

        Raises:
            DocumentError: If the document cannot be read or written.
            FrontmatterError: If its frontmatter is invalid.
        """
        if self._is_included is not None and not self._is_included(doc_id):
            logger.debug(f"Skipping excluded document: {doc_id}")
            return ProcessResult(doc_id=doc_id, skipped=True)

        rules = self._rules()
        tasks = parse_document(self._store.read(doc_id))

        if not requires_resolution(tasks, rules):
            logger.debug(f"No tasks in {doc_id}, nothing to resolve")
            return ProcessResult(doc_id=doc_id, skipped=True)

        updates = resolve_updates(tasks, rules)
        result = ProcessResult(doc_id=doc_id, task_count=len(tasks), updates=updates)
        if not updates:
            logger.debug(f"No updates for {doc_id} ({len(tasks)} tasks)")
            return result

        result.changed = self._writer.apply_updates(doc_id, updates)
        return result

    def process_all(self) -> BatchResult:
        """Process every document in the store.

        Failures are logged and collected; they do not stop the batch.

        Returns:
            BatchResult with counts and per-document errors.
        """
        start_time = time.perf_counter()
        batch = BatchResult()

        for doc_id in self._store.list_documents():
            if self._is_included is not None and not self._is_included(doc_id):
                continue
            try:
                result = self.process_document(doc_id)
            except TaskPropError as e:
                logger.warning(f"Failed to process {doc_id}: {e}")
                batch.errors.append((doc_id, str(e)))
                continue

            batch.processed += 1
            if result.changed:
                batch.changed += 1

        elapsed = time.perf_counter() - start_time
        logger.info(
            f"Processed {batch.processed} documents: {batch.changed} changed, "
            f"{len(batch.errors)} errors ({elapsed:.2f}s)"
        )
        return batch
