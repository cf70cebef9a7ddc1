"""YAML frontmatter parsing and merging.

The writer merges ``FrontmatterUpdate`` values into a document's header:
unrelated keys, key order and the document body are preserved, and an
update is skipped when overwriting is disabled and the key already holds a
non-empty value.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

import yaml
from loguru import logger

from ..core.exceptions import FrontmatterError
from ..core.types import FrontmatterUpdate

if TYPE_CHECKING:
    from ..sources.filesystem import FileSystemDocumentStore


@dataclass
class FrontmatterResult:
    """Result from parsing YAML frontmatter.

    Attributes:
        data: Parsed YAML data as dictionary (empty if no frontmatter).
        content: Document content after frontmatter is removed.
        has_frontmatter: Whether frontmatter was found.
    """

    data: dict[str, Any]
    content: str
    has_frontmatter: bool


# Matches a leading ---\n<yaml>\n--- block, including an empty one
_FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

_INTEGER_PATTERN = re.compile(r"^[0-9]+$")
_DECIMAL_PATTERN = re.compile(r"^[0-9]+(\.[0-9]+)?$")
_ISO_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_frontmatter(content: str) -> FrontmatterResult:
    """Parse YAML frontmatter from markdown content.

    Args:
        content: Full markdown document content.

    Returns:
        FrontmatterResult with parsed data and remaining content.

    Raises:
        FrontmatterError: If a frontmatter block exists but is not a YAML
            mapping. The header is never treated as absent in that case,
            since rewriting it would destroy the user's data.

    Example:
        >>> result = parse_frontmatter("---\\ntitle: My Doc\\n---\\n# Hello\\n")
        >>> result.data
        {'title': 'My Doc'}
    """
    match = _FRONTMATTER_PATTERN.match(content)
    if not match:
        return FrontmatterResult(data={}, content=content, has_frontmatter=False)

    yaml_text = match.group(1) or ""
    remaining_content = content[match.end() :]

    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e

    if data is None:
        data = {}
    elif not isinstance(data, dict):
        raise FrontmatterError(
            f"Frontmatter must be a mapping, got {type(data).__name__}"
        )

    return FrontmatterResult(data=data, content=remaining_content, has_frontmatter=True)


def render_frontmatter(data: dict[str, Any], body: str) -> str:
    """Serialize frontmatter data and prepend it to the document body."""
    yaml_text = yaml.safe_dump(
        data,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )
    return f"---\n{yaml_text}---\n{body}"


def coerce_value(value: str | int | float) -> Any:
    """Convert an update value to its natural YAML type.

    Pure integers become ``int``, decimals become ``float`` and valid
    ``YYYY-MM-DD`` strings become ``datetime.date`` so they serialize as
    unquoted YAML dates. Everything else stays a string.
    """
    if not isinstance(value, str):
        return value
    if _INTEGER_PATTERN.match(value):
        return int(value)
    if _DECIMAL_PATTERN.match(value):
        return float(value)
    if _ISO_DATE_PATTERN.match(value):
        try:
            return datetime.date.fromisoformat(value)
        except ValueError:
            return value
    return value


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def merge_frontmatter(
    content: str, updates: Iterable[FrontmatterUpdate]
) -> tuple[str, bool]:
    """Apply updates to the frontmatter of a document.

    Updates are applied in order, so when several target the same key the
    last applicable one wins.

    Args:
        content: Full document content.
        updates: Updates to merge.

    Returns:
        Tuple of (new content, changed). Content is returned untouched when
        nothing changed.

    Raises:
        FrontmatterError: If the existing frontmatter cannot be parsed.
    """
    result = parse_frontmatter(content)
    data = dict(result.data)
    changed = False

    for update in updates:
        existing = data.get(update.key)
        if not update.overwrite_existing and _has_value(existing):
            continue

        new_value = coerce_value(update.value)
        if (
            update.key in data
            and type(existing) is type(new_value)
            and existing == new_value
        ):
            continue

        data[update.key] = new_value
        changed = True

    if not changed:
        return content, False
    return render_frontmatter(data, result.content), True


class FrontmatterWriter:
    """Writes frontmatter updates to documents in a filesystem store.

    Example:
        store = FileSystemDocumentStore(vault_path)
        writer = FrontmatterWriter(store)
        writer.apply_updates("projects/plan.md", updates)
    """

    def __init__(self, store: "FileSystemDocumentStore") -> None:
        """Initialize writer.

        Args:
            store: Document store used to read and write documents.
        """
        self._store = store

    def apply_updates(self, doc_id: str, updates: list[FrontmatterUpdate]) -> bool:
        """Merge updates into a document's frontmatter.

        Args:
            doc_id: Document identifier in the store.
            updates: Updates to apply in order.

        Returns:
            True if the document was rewritten.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            FrontmatterError: If the existing frontmatter is invalid.
        """
        if not updates:
            return False

        content = self._store.read(doc_id)
        try:
            new_content, changed = merge_frontmatter(content, updates)
        except FrontmatterError as e:
            raise FrontmatterError(f"{doc_id}: {e}") from e

        if not changed:
            logger.debug(f"Frontmatter unchanged: {doc_id}")
            return False

        self._store.write(doc_id, new_content)
        logger.debug(f"Frontmatter updated: {doc_id} ({len(updates)} updates)")
        return True
