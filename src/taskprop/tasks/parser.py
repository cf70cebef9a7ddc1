"""Parser for emoji-based task metadata in markdown checkbox lines.

Recognizes lines such as::

    - [ ] Write report 🔼 ⏳ 2025-04-10 📅 2025-04-12 🔁 every week

and decodes dates, recurrence, priority and status into a ``ParsedTask``.
Lines that are not checkbox items are skipped; malformed markers leave the
corresponding field empty. Nothing here raises.
"""

import re

from ..core.types import ParsedTask, Priority

# Regex to match a checkbox list item: "- [ ] text", "* [x] text"
_TASK_CHECKBOX_PATTERN = re.compile(r"^(\s*[-*]\s*\[(.)\])\s*(.*)")

_DATE = r"\s*([0-9]{4}-[0-9]{2}-[0-9]{2})"

DUE_DATE_PATTERN = re.compile("📅" + _DATE)
SCHEDULED_DATE_PATTERN = re.compile("⏳" + _DATE)
START_DATE_PATTERN = re.compile("🛫" + _DATE)
CREATED_DATE_PATTERN = re.compile("➕" + _DATE)
DONE_DATE_PATTERN = re.compile("✅" + _DATE)

# Recurrence text runs until the next marker glyph (dates, priorities, id)
RECURRENCE_PATTERN = re.compile("🔁\\s*([^📅⏳🛫➕✅🔺⏫🔼🔽⏬🆔]*)")

# Checked in this order; the first glyph present wins regardless of position
PRIORITY_PATTERNS: tuple[tuple[Priority, re.Pattern[str]], ...] = (
    (Priority.HIGHEST, re.compile("🔺")),
    (Priority.HIGH, re.compile("⏫")),
    (Priority.MEDIUM, re.compile("🔼")),
    (Priority.LOW, re.compile("🔽")),
    (Priority.LOWEST, re.compile("⏬")),
)

_DATE_PATTERNS = (
    DUE_DATE_PATTERN,
    SCHEDULED_DATE_PATTERN,
    START_DATE_PATTERN,
    CREATED_DATE_PATTERN,
    DONE_DATE_PATTERN,
)

_WHITESPACE_PATTERN = re.compile(r"\s+")

_DONE_STATUSES = frozenset({"x", "X"})


def parse_document(content: str) -> list[ParsedTask]:
    """Parse all tasks from a markdown document.

    Args:
        content: Full document content.

    Returns:
        Parsed tasks in line order. Non-task lines produce nothing.

    Example:
        >>> tasks = parse_document("# Plan\\n- [x] Ship ✅ 2025-03-28\\n")
        >>> tasks[0].done_date, tasks[0].line_number
        ('2025-03-28', 1)
    """
    tasks = []
    for line_number, line in enumerate(content.split("\n")):
        task = parse_task_line(line, line_number)
        if task is not None:
            tasks.append(task)
    return tasks


def parse_task_line(line: str, line_number: int = 0) -> ParsedTask | None:
    """Parse a single line into a task.

    Args:
        line: Line text without its trailing newline.
        line_number: Zero-based index of the line in its document.

    Returns:
        ParsedTask, or None if the line is not a checkbox item.
    """
    match = _TASK_CHECKBOX_PATTERN.match(line)
    if not match:
        return None

    status = match.group(2)
    task_content = match.group(3).strip()

    recurrence = _extract(task_content, RECURRENCE_PATTERN)
    if recurrence is not None:
        recurrence = recurrence.strip() or None

    return ParsedTask(
        line=line,
        line_number=line_number,
        is_done=status in _DONE_STATUSES,
        status=status,
        description=extract_description(task_content),
        due_date=_extract(task_content, DUE_DATE_PATTERN),
        scheduled_date=_extract(task_content, SCHEDULED_DATE_PATTERN),
        start_date=_extract(task_content, START_DATE_PATTERN),
        created_date=_extract(task_content, CREATED_DATE_PATTERN),
        done_date=_extract(task_content, DONE_DATE_PATTERN),
        recurrence=recurrence,
        priority=extract_priority(task_content),
    )


def extract_priority(text: str) -> str | None:
    """Return the priority value for the highest-precedence glyph in text."""
    for priority, pattern in PRIORITY_PATTERNS:
        if pattern.search(text):
            return priority.value
    return None


def extract_description(task_content: str) -> str:
    """Strip metadata markers from task content.

    The first occurrence of every marker pattern is removed, then runs of
    whitespace are collapsed to a single space.

    Args:
        task_content: Text following the checkbox.

    Returns:
        Plain task description.
    """
    text = task_content
    for pattern in _DATE_PATTERNS:
        text = pattern.sub("", text, count=1)
    text = RECURRENCE_PATTERN.sub("", text, count=1)
    for _, pattern in PRIORITY_PATTERNS:
        text = pattern.sub("", text, count=1)
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def _extract(text: str, pattern: re.Pattern[str]) -> str | None:
    match = pattern.search(text)
    return match.group(1) if match else None


_PROPERTY_GETTERS = {
    "due_date": lambda task: task.due_date,
    "scheduled_date": lambda task: task.scheduled_date,
    "start_date": lambda task: task.start_date,
    "created_date": lambda task: task.created_date,
    "done_date": lambda task: task.done_date,
    "recurrence": lambda task: task.recurrence,
    "priority": lambda task: task.priority,
    "status": lambda task: task.status,
    "description": lambda task: task.description,
}


def get_task_property_value(task: ParsedTask, property_name: str) -> str | None:
    """Look up a task property by name.

    Args:
        task: Parsed task.
        property_name: One of the ``TaskProperty`` values.

    Returns:
        The stored value, or None if unset or the name is unknown.
    """
    getter = _PROPERTY_GETTERS.get(property_name)
    if getter is None:
        return None
    return getter(task)
