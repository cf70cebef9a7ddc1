"""Condition evaluation for filtering parsed tasks.

Values are compared as text. Ordering operators use plain string
comparison, which orders ``YYYY-MM-DD`` dates correctly and is applied
the same way to every property.
"""

from typing import Callable, Iterable, Sequence

from loguru import logger

from ..core.types import Condition, ConditionLogic, ParsedTask
from .parser import get_task_property_value

Comparator = Callable[[str | None, str], bool]


def _is_empty(value: str | None, _: str) -> bool:
    return value is None or value == ""


def _ordered(compare: Callable[[str, str], bool]) -> Comparator:
    def check(value: str | None, expected: str) -> bool:
        if value is None:
            return False
        return compare(value, expected)

    return check


_COMPARATORS: dict[str, Comparator] = {
    "equals": lambda value, expected: value is not None and value == expected,
    "not_equals": lambda value, expected: value is None or value != expected,
    "contains": lambda value, expected: value is not None and expected in value,
    "not_contains": lambda value, expected: value is None or expected not in value,
    "is_empty": _is_empty,
    "is_not_empty": lambda value, expected: not _is_empty(value, expected),
    "greater_than": _ordered(lambda a, b: a > b),
    "less_than": _ordered(lambda a, b: a < b),
    "greater_or_equal": _ordered(lambda a, b: a >= b),
    "less_or_equal": _ordered(lambda a, b: a <= b),
}


def evaluate_condition(task: ParsedTask, condition: Condition) -> bool:
    """Check whether a task satisfies a condition.

    Args:
        task: Parsed task.
        condition: Property, operator and literal to compare against.

    Returns:
        True if the condition holds. Unknown operators always hold.
    """
    comparator = _COMPARATORS.get(condition.operator)
    if comparator is None:
        logger.debug(f"Unknown condition operator: {condition.operator!r}")
        return True
    value = get_task_property_value(task, condition.property)
    return comparator(value, condition.value)


def filter_tasks(
    tasks: Sequence[ParsedTask],
    conditions: Iterable[Condition],
    logic: str = ConditionLogic.AND.value,
) -> list[ParsedTask]:
    """Keep only the tasks matching a set of conditions.

    Args:
        tasks: Tasks in document order.
        conditions: Conditions to apply. No conditions means no filtering.
        logic: ``"AND"`` (all must hold) or ``"OR"`` (any must hold).

    Returns:
        Matching tasks, original order preserved.
    """
    conditions = list(conditions)
    if not conditions:
        return list(tasks)

    combine = any if logic == ConditionLogic.OR.value else all
    return [
        task
        for task in tasks
        if combine(evaluate_condition(task, cond) for cond in conditions)
    ]
