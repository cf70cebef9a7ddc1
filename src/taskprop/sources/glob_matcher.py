"""Document selection by glob patterns and excluded folders."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterator

from loguru import logger


class DocumentMatcher:
    """Select vault documents with include/exclude globs and excluded folders.

    - Patterns without prefix are "include" patterns (OR'd together)
    - Patterns with ! prefix are "exclude" patterns
    - Excluded folders exclude every document below them (prefix match)

    Example:
        matcher = DocumentMatcher(["**/*.md", "!**/drafts/**"], ["Templates"])
        matcher.matches("projects/plan.md")    # True
        matcher.matches("drafts/wip.md")       # False (excluded pattern)
        matcher.matches("Templates/daily.md")  # False (excluded folder)
    """

    def __init__(
        self,
        patterns: list[str] | str | None = None,
        excluded_folders: list[str] | None = None,
    ) -> None:
        """Initialize with pattern list and excluded folders.

        Args:
            patterns: Glob patterns; ! prefix marks exclusions.
            excluded_folders: Folder paths relative to the vault root.

        Raises:
            ValueError: If no include patterns are provided.
        """
        patterns = parse_glob_patterns(patterns)
        self.includes = [p for p in patterns if not p.startswith("!")]
        self.excludes = [p[1:] for p in patterns if p.startswith("!")]
        self.excluded_folders = [
            _normalize_folder(folder) for folder in excluded_folders or [] if folder.strip("/ ")
        ]

        if not self.includes:
            raise ValueError(
                "At least one include pattern required (patterns without ! prefix)"
            )

        logger.debug(
            f"DocumentMatcher initialized: includes={self.includes}, "
            f"excludes={self.excludes}, excluded_folders={self.excluded_folders}"
        )

    def is_excluded_folder(self, path: str) -> bool:
        """Check whether a relative path lies inside an excluded folder."""
        normalized = path.replace("\\", "/")
        return any(normalized.startswith(folder) for folder in self.excluded_folders)

    def matches(self, path: str) -> bool:
        """Check if a relative path is a document to process.

        Args:
            path: Relative file path (forward slashes).

        Returns:
            True if path matches any include, no exclude, and is not in an
            excluded folder.
        """
        normalized = path.replace("\\", "/")

        if self.is_excluded_folder(normalized):
            return False

        if not any(_glob_match(normalized, inc) for inc in self.includes):
            return False

        if any(_glob_match(normalized, exc) for exc in self.excludes):
            return False

        return True

    def list_matching_files(self, base_path: Path) -> Iterator[Path]:
        """List all files under base_path that match.

        Args:
            base_path: Vault root.

        Yields:
            Matching file paths, deduplicated, in sorted order per pattern.
        """
        seen: set[Path] = set()

        for pattern in self.includes:
            logger.debug(f"Globbing pattern: {pattern}")
            try:
                for file_path in sorted(base_path.glob(pattern)):
                    if file_path in seen or not file_path.is_file():
                        continue

                    rel_path = file_path.relative_to(base_path).as_posix()
                    if not self.matches(rel_path):
                        logger.debug(f"Excluded: {rel_path}")
                        continue

                    seen.add(file_path)
                    yield file_path

            except OSError as e:
                logger.warning(f"Error globbing pattern {pattern}: {e}")


def _normalize_folder(folder: str) -> str:
    folder = folder.replace("\\", "/").strip().lstrip("/")
    return folder if folder.endswith("/") else folder + "/"


def _glob_match(path: str, pattern: str) -> bool:
    """Match path against a single glob pattern.

    "**/*.md" matches both "doc.md" and "subdir/doc.md"; "**/X/**" matches
    any path with a directory component X.
    """
    p = PurePosixPath(path)

    if pattern.startswith("**/"):
        suffix_pattern = pattern[3:]

        if suffix_pattern.startswith("**/") and _glob_match(path, suffix_pattern):
            return True

        if suffix_pattern.endswith("/**"):
            dir_part = suffix_pattern[:-3]
            return dir_part in path.split("/")[:-1]

        return p.match(suffix_pattern) or p.match(pattern)

    if pattern.endswith("/**"):
        return path.startswith(pattern[:-2])

    return p.match(pattern)


def parse_glob_patterns(patterns: list[str] | str | None) -> list[str]:
    """Normalize glob pattern input to a list.

    Args:
        patterns: Single pattern, list of patterns, or None.

    Returns:
        List of patterns, defaulting to ["**/*.md"] if None/empty.
    """
    if patterns is None:
        return ["**/*.md"]
    if isinstance(patterns, str):
        return [patterns]
    if not patterns:
        return ["**/*.md"]
    return list(patterns)
