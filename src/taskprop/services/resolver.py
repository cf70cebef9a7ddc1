"""Resolve configured mappings into frontmatter updates.

Direct mappings copy the first non-empty value of a task property.
Operation mappings filter the tasks by their conditions and aggregate the
rest. Updates come out in configuration order, direct mappings first; two
mappings targeting the same key both produce an update and the writer
applies them in sequence.
"""

from typing import Sequence

from ..core.types import (
    COUNTING_OPERATIONS,
    DirectMapping,
    FrontmatterUpdate,
    OperationMapping,
    ParsedTask,
    RuleSet,
)
from ..tasks import execute_operation, filter_tasks, get_task_property_value


def resolve_direct_mapping(
    mapping: DirectMapping, tasks: Sequence[ParsedTask]
) -> FrontmatterUpdate | None:
    """Build the update for a direct mapping from the first matching task."""
    for task in tasks:
        value = get_task_property_value(task, mapping.task_property)
        if value:
            return FrontmatterUpdate(
                key=mapping.frontmatter_key,
                value=value,
                overwrite_existing=mapping.overwrite_existing,
            )
    return None


def resolve_operation_mapping(
    mapping: OperationMapping, tasks: Sequence[ParsedTask]
) -> FrontmatterUpdate | None:
    """Build the update for an operation mapping, if it yields a result."""
    filtered = filter_tasks(tasks, mapping.conditions, mapping.condition_logic)
    result = execute_operation(filtered, mapping.task_property, mapping.operation)
    if result is None:
        return None
    return FrontmatterUpdate(
        key=mapping.frontmatter_key,
        value=result,
        overwrite_existing=mapping.overwrite_existing,
    )


def requires_resolution(tasks: Sequence[ParsedTask], rules: RuleSet) -> bool:
    """Whether a document needs resolving at all.

    A document without tasks only matters when an enabled operation mapping
    counts tasks, since counts are meaningful over zero tasks.
    """
    if tasks:
        return True
    return any(
        m.enabled and m.operation in COUNTING_OPERATIONS
        for m in rules.operation_mappings
    )


def resolve_updates(
    tasks: Sequence[ParsedTask], rules: RuleSet
) -> list[FrontmatterUpdate]:
    """Compute every frontmatter update for a document's tasks.

    Args:
        tasks: All tasks parsed from the document, in line order.
        rules: Mapping rules snapshot.

    Returns:
        Updates in configuration order; empty if nothing applies.
    """
    if not requires_resolution(tasks, rules):
        return []

    updates: list[FrontmatterUpdate] = []

    for direct in rules.direct_mappings:
        if not direct.enabled:
            continue
        update = resolve_direct_mapping(direct, tasks)
        if update is not None:
            updates.append(update)

    for operation in rules.operation_mappings:
        if not operation.enabled:
            continue
        update = resolve_operation_mapping(operation, tasks)
        if update is not None:
            updates.append(update)

    return updates
