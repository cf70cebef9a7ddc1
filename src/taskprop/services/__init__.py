"""Services for resolving mappings and processing documents."""

from .guard import Debouncer, ProcessingGuard
from .processor import TaskPropertyProcessor
from .resolver import (
    requires_resolution,
    resolve_direct_mapping,
    resolve_operation_mapping,
    resolve_updates,
)
from .watcher import VaultWatcher

__all__ = [
    "TaskPropertyProcessor",
    "ProcessingGuard",
    "Debouncer",
    "VaultWatcher",
    "requires_resolution",
    "resolve_direct_mapping",
    "resolve_operation_mapping",
    "resolve_updates",
]
