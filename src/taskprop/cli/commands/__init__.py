"""Command implementations for taskprop CLI."""

from .process import build_processor, handle_process, handle_process_all, handle_watch
from .tasks import add_file_arguments, handle_resolve, handle_tasks

__all__ = [
    "add_file_arguments",
    "build_processor",
    "handle_tasks",
    "handle_resolve",
    "handle_process",
    "handle_process_all",
    "handle_watch",
]
