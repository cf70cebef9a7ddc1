"""Task extraction, filtering and aggregation.

- parse_document / parse_task_line: decode checkbox lines
- get_task_property_value: read a property by name
- evaluate_condition / filter_tasks: condition filtering
- execute_operation: reduce tasks to a single value
"""

from .conditions import evaluate_condition, filter_tasks
from .operations import OPERATIONS, execute_operation, get_property_values
from .parser import (
    extract_description,
    extract_priority,
    get_task_property_value,
    parse_document,
    parse_task_line,
)

__all__ = [
    "parse_document",
    "parse_task_line",
    "extract_description",
    "extract_priority",
    "get_task_property_value",
    "evaluate_condition",
    "filter_tasks",
    "execute_operation",
    "get_property_values",
    "OPERATIONS",
]
