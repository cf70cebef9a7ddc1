"""Frontmatter storage for taskprop."""

from .frontmatter import (
    FrontmatterResult,
    FrontmatterWriter,
    coerce_value,
    merge_frontmatter,
    parse_frontmatter,
    render_frontmatter,
)

__all__ = [
    "FrontmatterResult",
    "FrontmatterWriter",
    "coerce_value",
    "merge_frontmatter",
    "parse_frontmatter",
    "render_frontmatter",
]
