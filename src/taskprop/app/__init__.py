"""Application wiring for taskprop."""

from .protocols import DocumentStoreProtocol, FrontmatterWriterProtocol

__all__ = [
    "DocumentStoreProtocol",
    "FrontmatterWriterProtocol",
]
