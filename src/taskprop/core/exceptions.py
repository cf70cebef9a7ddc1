"""Custom exceptions for taskprop."""


class TaskPropError(Exception):
    """Base exception for all taskprop errors."""

    pass


class ConfigError(TaskPropError):
    """Configuration could not be loaded or failed validation."""

    pass


class DocumentError(TaskPropError):
    """Document operation failed."""

    pass


class DocumentNotFoundError(DocumentError):
    """Document does not exist."""

    def __init__(self, path: str):
        """Initialize exception with the missing path.

        Args:
            path: Path to the document that was not found.
        """
        self.path = path
        super().__init__(f"Document not found: {path}")


class FrontmatterError(DocumentError):
    """Frontmatter could not be parsed or written."""

    pass
