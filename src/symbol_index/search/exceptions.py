"""Exceptions raised by the symbol index."""

from typing import Any, Dict, Optional


class SymbolIndexError(Exception):
    """Base error for index operations, with optional context."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize the error.

        Args:
            message: Human-readable error message
            details: Additional context for logs and debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class IndexCorruptionError(SymbolIndexError):
    """A stored document cannot be mapped back to an index entry.

    Raised for unknown ``TYPE`` tags, which means the index was written by
    an incompatible schema or is damaged. Never recovered from.
    """

    def __init__(self, tag: Any, fqn: Optional[str] = None):
        super().__init__(
            f"Unrecognized document type tag: {tag!r}",
            {"tag": tag, "fqn": fqn},
        )
        self.tag = tag


class IndexOperationError(SymbolIndexError):
    """The underlying index failed to carry out an operation."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            f"Index {operation} failed: {message}", {"operation": operation}
        )
        self.operation = operation
