"""Type definitions for taskprop."""

from dataclasses import dataclass, field
from enum import Enum


class TaskProperty(Enum):
    """Task properties that can be read from a parsed task."""

    DUE_DATE = "due_date"
    SCHEDULED_DATE = "scheduled_date"
    START_DATE = "start_date"
    CREATED_DATE = "created_date"
    DONE_DATE = "done_date"
    RECURRENCE = "recurrence"
    PRIORITY = "priority"
    STATUS = "status"
    DESCRIPTION = "description"


class Priority(Enum):
    """Task priority levels, highest first."""

    HIGHEST = "highest"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    LOWEST = "lowest"


class OperationType(Enum):
    """Aggregations that reduce a task list to a single value."""

    MIN = "min"
    MAX = "max"
    COUNT = "count"
    COUNT_ALL = "count_all"
    COUNT_DONE = "count_done"
    COUNT_OPEN = "count_open"
    PERCENTAGE_DONE = "percentage_done"
    LIST = "list"
    FIRST = "first"
    LAST = "last"


# Operations that still produce a value when the task list is empty.
COUNTING_OPERATIONS = frozenset(
    {
        OperationType.COUNT_ALL.value,
        OperationType.COUNT_DONE.value,
        OperationType.COUNT_OPEN.value,
        OperationType.PERCENTAGE_DONE.value,
    }
)


class ConditionOperator(Enum):
    """Comparison operators for task conditions."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS_OR_EQUAL = "less_or_equal"


class ConditionLogic(Enum):
    """How multiple conditions are combined."""

    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class ParsedTask:
    """A task line decoded from a markdown document.

    Attributes:
        line: The full line text.
        line_number: Zero-based line index in the document.
        is_done: Whether the status marker is ``x`` or ``X``.
        status: Raw status character between the brackets.
        description: Task text with all metadata markers removed.
        due_date: Due date (YYYY-MM-DD).
        scheduled_date: Scheduled date (YYYY-MM-DD).
        start_date: Start date (YYYY-MM-DD).
        created_date: Created date (YYYY-MM-DD).
        done_date: Completion date (YYYY-MM-DD).
        recurrence: Recurrence rule text.
        priority: One of the ``Priority`` values.
    """

    line: str
    line_number: int
    is_done: bool
    status: str
    description: str
    due_date: str | None = None
    scheduled_date: str | None = None
    start_date: str | None = None
    created_date: str | None = None
    done_date: str | None = None
    recurrence: str | None = None
    priority: str | None = None


@dataclass(frozen=True)
class Condition:
    """A single filter on a task property.

    Example: ``Condition("status", "not_equals", "x")`` keeps open tasks.
    ``value`` is ignored by ``is_empty`` and ``is_not_empty``.
    """

    property: str
    operator: str
    value: str = ""


@dataclass(frozen=True)
class DirectMapping:
    """Copies the first non-empty task property value to a frontmatter key."""

    task_property: str
    frontmatter_key: str
    overwrite_existing: bool = True
    enabled: bool = True
    id: str = ""


@dataclass(frozen=True)
class OperationMapping:
    """Aggregates a task property over filtered tasks into a frontmatter key."""

    task_property: str
    operation: str
    frontmatter_key: str
    overwrite_existing: bool = True
    enabled: bool = True
    conditions: tuple[Condition, ...] = ()
    condition_logic: str = ConditionLogic.AND.value
    id: str = ""


@dataclass(frozen=True)
class RuleSet:
    """Immutable snapshot of the mapping rules for one processing pass."""

    direct_mappings: tuple[DirectMapping, ...] = ()
    operation_mappings: tuple[OperationMapping, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when no mapping is enabled."""
        return not any(m.enabled for m in self.direct_mappings) and not any(
            m.enabled for m in self.operation_mappings
        )


@dataclass(frozen=True)
class FrontmatterUpdate:
    """A single key/value to merge into a document's frontmatter."""

    key: str
    value: str | int | float
    overwrite_existing: bool


@dataclass
class ProcessResult:
    """Outcome of processing a single document."""

    doc_id: str
    """Document identifier (path relative to the vault)."""

    task_count: int = 0
    """Number of tasks parsed from the document."""

    updates: list[FrontmatterUpdate] = field(default_factory=list)
    """Updates produced by the resolver."""

    changed: bool = False
    """Whether the frontmatter writer modified the document."""

    skipped: bool = False
    """Whether the document was skipped (excluded or nothing to resolve)."""


@dataclass
class BatchResult:
    """Outcome of processing every document in a vault."""

    processed: int = 0
    """Number of documents processed."""

    changed: int = 0
    """Number of documents whose frontmatter changed."""

    errors: list[tuple[str, str]] = field(default_factory=list)
    """List of (doc_id, error_message) for failed documents."""
