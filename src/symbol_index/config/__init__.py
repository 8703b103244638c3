"""Configuration package for the symbol index."""

from .exceptions import ConfigurationError
from .settings import IndexConfig, LoggingConfig, Settings

__all__ = [
    "ConfigurationError",
    "IndexConfig",
    "LoggingConfig",
    "Settings",
]
