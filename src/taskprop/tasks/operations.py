"""Aggregation operations over a list of parsed tasks.

Each operation reduces tasks (already filtered by conditions) to a single
string suitable for frontmatter, or None when there is nothing to write.
"""

import math
from typing import Callable, Sequence

from loguru import logger

from ..core.types import COUNTING_OPERATIONS, ParsedTask
from .parser import get_task_property_value


def get_property_values(tasks: Sequence[ParsedTask], property_name: str) -> list[str]:
    """Collect the non-empty values of a property, in task order."""
    values = []
    for task in tasks:
        value = get_task_property_value(task, property_name)
        if value:
            values.append(value)
    return values


def compute_min(tasks: Sequence[ParsedTask], property_name: str) -> str | None:
    """Smallest value by string order; for dates, the earliest."""
    values = get_property_values(tasks, property_name)
    return min(values) if values else None


def compute_max(tasks: Sequence[ParsedTask], property_name: str) -> str | None:
    """Largest value by string order; for dates, the latest."""
    values = get_property_values(tasks, property_name)
    return max(values) if values else None


def compute_count(tasks: Sequence[ParsedTask], property_name: str) -> str:
    """Number of tasks that have the property set."""
    return str(len(get_property_values(tasks, property_name)))


def compute_count_all(tasks: Sequence[ParsedTask], property_name: str) -> str:
    return str(len(tasks))


def compute_count_done(tasks: Sequence[ParsedTask], property_name: str) -> str:
    return str(sum(1 for task in tasks if task.is_done))


def compute_count_open(tasks: Sequence[ParsedTask], property_name: str) -> str:
    return str(sum(1 for task in tasks if not task.is_done))


def compute_percentage_done(tasks: Sequence[ParsedTask], property_name: str) -> str:
    """Percentage of completed tasks, rounded half up to an integer."""
    if not tasks:
        return "0"
    done = sum(1 for task in tasks if task.is_done)
    return str(math.floor(done / len(tasks) * 100 + 0.5))


def compute_list(tasks: Sequence[ParsedTask], property_name: str) -> str | None:
    """Comma-separated list of all values."""
    values = get_property_values(tasks, property_name)
    return ", ".join(values) if values else None


def compute_first(tasks: Sequence[ParsedTask], property_name: str) -> str | None:
    for task in tasks:
        value = get_task_property_value(task, property_name)
        if value:
            return value
    return None


def compute_last(tasks: Sequence[ParsedTask], property_name: str) -> str | None:
    return compute_first(list(reversed(tasks)), property_name)


OPERATIONS: dict[str, Callable[[Sequence[ParsedTask], str], str | None]] = {
    "min": compute_min,
    "max": compute_max,
    "count": compute_count,
    "count_all": compute_count_all,
    "count_done": compute_count_done,
    "count_open": compute_count_open,
    "percentage_done": compute_percentage_done,
    "list": compute_list,
    "first": compute_first,
    "last": compute_last,
}


def execute_operation(
    tasks: Sequence[ParsedTask],
    task_property: str,
    operation: str,
) -> str | None:
    """Run an aggregation over tasks.

    Args:
        tasks: Tasks to aggregate, already filtered by the caller.
        task_property: Property to read (ignored by the counting operations).
        operation: One of the ``OperationType`` values.

    Returns:
        The result as a string, or None when there is no result. On an
        empty task list only the counting operations return a value ("0").
    """
    compute = OPERATIONS.get(operation)
    if compute is None:
        logger.debug(f"Unknown operation: {operation!r}")
        return None
    if not tasks and operation not in COUNTING_OPERATIONS:
        return None
    return compute(tasks, task_property)
