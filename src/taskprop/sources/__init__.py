"""Document sources for taskprop."""

from .filesystem import FileSystemDocumentStore
from .glob_matcher import DocumentMatcher, parse_glob_patterns

__all__ = [
    "FileSystemDocumentStore",
    "DocumentMatcher",
    "parse_glob_patterns",
]
