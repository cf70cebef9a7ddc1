"""Task Property Sync - keep markdown frontmatter in sync with task metadata."""

__version__ = "1.0.0"
