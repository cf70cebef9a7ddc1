"""Filesystem document store.

Serves the markdown documents below a vault root. Document identifiers are
POSIX paths relative to the root.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from ..core.exceptions import DocumentError, DocumentNotFoundError
from .glob_matcher import DocumentMatcher


class FileSystemDocumentStore:
    """Document store for a local vault directory.

    Example:
        store = FileSystemDocumentStore(Path("~/notes").expanduser())
        for doc_id in store.list_documents():
            print(doc_id, len(store.read(doc_id)))
    """

    def __init__(
        self,
        base_path: Path | str,
        glob_patterns: list[str] | None = None,
        excluded_folders: list[str] | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize filesystem store.

        Args:
            base_path: Vault root directory.
            glob_patterns: Document patterns (default: ['**/*.md']).
            excluded_folders: Folders below the root that are never listed.
            encoding: File encoding to use.
        """
        self._base_path = Path(base_path).expanduser().resolve()
        self._matcher = DocumentMatcher(glob_patterns, excluded_folders)
        self._encoding = encoding

    @property
    def base_path(self) -> Path:
        """Get the resolved vault root."""
        return self._base_path

    @property
    def matcher(self) -> DocumentMatcher:
        """Get the document matcher."""
        return self._matcher

    def list_documents(self) -> list[str]:
        """List identifiers of every document in the vault."""
        if not self._base_path.is_dir():
            raise DocumentError(f"Vault path is not a directory: {self._base_path}")
        return [
            path.relative_to(self._base_path).as_posix()
            for path in self._matcher.list_matching_files(self._base_path)
        ]

    def includes(self, doc_id: str) -> bool:
        """Whether a document id is selected by the glob and folder rules."""
        return self._matcher.matches(doc_id)

    def doc_id_for(self, path: Path | str) -> str | None:
        """Map a filesystem path to a document id, or None if outside the vault."""
        resolved = Path(path).expanduser().resolve()
        try:
            return resolved.relative_to(self._base_path).as_posix()
        except ValueError:
            return None

    def path_for(self, doc_id: str) -> Path:
        """Resolve a document id to an absolute path inside the vault.

        Raises:
            DocumentError: If the id escapes the vault root.
        """
        path = (self._base_path / doc_id).resolve()
        if not path.is_relative_to(self._base_path):
            raise DocumentError(f"Path is outside the vault: {doc_id}")
        return path

    def read(self, doc_id: str) -> str:
        """Read the full text of a document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            DocumentError: If the document cannot be read.
        """
        path = self.path_for(doc_id)
        try:
            with path.open(encoding=self._encoding, newline="") as f:
                return f.read()
        except FileNotFoundError as e:
            raise DocumentNotFoundError(doc_id) from e
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"Failed to read {doc_id}: {e}") from e

    def write(self, doc_id: str, content: str) -> None:
        """Replace a document's content atomically.

        Raises:
            DocumentError: If the document cannot be written.
        """
        path = self.path_for(doc_id)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            # newline="" keeps the document's own line endings
            with tmp.open("w", encoding=self._encoding, newline="") as f:
                f.write(content)
            os.replace(tmp, path)
        except OSError as e:
            logger.warning(f"Failed to write {doc_id}: {e}")
            tmp.unlink(missing_ok=True)
            raise DocumentError(f"Failed to write {doc_id}: {e}") from e
