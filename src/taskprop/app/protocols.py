"""Protocol definitions for taskprop's collaborators.

The processor depends on these interfaces rather than on the filesystem
implementations, so tests and other hosts can supply their own document
store and frontmatter writer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..core.types import FrontmatterUpdate


@runtime_checkable
class DocumentStoreProtocol(Protocol):
    """Read access to the documents being processed."""

    def list_documents(self) -> list[str]:
        """List identifiers of all documents."""
        ...

    def read(self, doc_id: str) -> str:
        """Read the full text of a document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        ...


@runtime_checkable
class FrontmatterWriterProtocol(Protocol):
    """Merges key/value updates into a document's frontmatter.

    Implementations must preserve unrelated keys and honour each update's
    ``overwrite_existing`` flag.
    """

    def apply_updates(self, doc_id: str, updates: list[FrontmatterUpdate]) -> bool:
        """Apply updates in order.

        Returns:
            True if the document changed.
        """
        ...
