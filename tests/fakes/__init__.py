"""Test fakes for testing without a real vault.

This module provides in-memory implementations of the collaborator
protocols in taskprop.app.protocols.

Example:
    from tests.fakes import InMemoryDocumentStore, RecordingFrontmatterWriter

    store = InMemoryDocumentStore({"plan.md": "- [ ] Draft ⏳ 2025-04-10"})
    writer = RecordingFrontmatterWriter()
    processor = TaskPropertyProcessor(store, writer, rules)
"""

from .stores import InMemoryDocumentStore, RecordingFrontmatterWriter

__all__ = [
    "InMemoryDocumentStore",
    "RecordingFrontmatterWriter",
]
