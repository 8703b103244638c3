"""Errors raised while loading symbol index settings.

Settings come from a YAML file passed with ``--config`` and from ``LOG_*``
and ``SYMBOL_INDEX_*`` environment variables.
"""

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """Unreadable or invalid settings, with the offending file and errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize the error.

        Args:
            message: What failed, naming the configuration file
            details: Validation messages or the underlying I/O error
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error message with details if available."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message
