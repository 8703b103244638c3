"""Application configuration settings."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError


class LoggingConfig(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="INFO", description="Log level")
    file_path: Optional[str] = Field(default=None, description="Log file path")
    json_format: bool = Field(default=True, description="Use JSON log format")
    enable_performance: bool = Field(
        default=True, description="Enable performance logging"
    )

    class Config:
        env_prefix = "LOG_"


class IndexConfig(BaseSettings):
    """Symbol index configuration settings."""

    index_directory: str = Field(
        default="./symbol_index", description="Index directory"
    )
    penalty_step: float = Field(
        default=0.25,
        gt=0.0,
        lt=1.0,
        description="Boost removed per non-trailing '$' in a name",
    )
    priority_bonus: float = Field(
        default=0.25,
        ge=0.0,
        description="Flat boost added to prioritized symbols",
    )
    default_max_results: int = Field(
        default=50, gt=0, description="Default result cap for searches"
    )
    worker_threads: int = Field(
        default=2, ge=1, description="Threads running blocking index I/O"
    )

    class Config:
        env_prefix = "SYMBOL_INDEX_"

    def get_index_path(self, data_dir: str = "data") -> Path:
        """Get the index directory path."""
        index_path = Path(self.index_directory)
        if index_path.is_absolute():
            return index_path
        return Path(data_dir) / index_path


class Settings(BaseSettings):
    """Main application settings."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)

    debug: bool = Field(
        default=False, description="Debug logging and error tracebacks unless --quiet"
    )
    data_dir: str = Field(default="data", description="Data directory path")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "Settings":
        """Load settings from a YAML file.

        Args:
            config_path: Path to a YAML document with ``logging``/``index``
                sections

        Returns:
            Settings: Validated settings

        Raises:
            ConfigurationError: If the file is unreadable or invalid
        """
        path = Path(config_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data: Dict[str, Any] = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot read configuration file {path}", {"error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping"
            )

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration in {path}",
                {"errors": [err["msg"] for err in e.errors()]},
            ) from e

    def get_log_file_path(self) -> Optional[Path]:
        """Get the log file path if configured."""
        if self.logging.file_path:
            return Path(self.logging.file_path)
        return None

    def get_index_path(self) -> Path:
        """Get the index directory path."""
        return self.index.get_index_path(self.data_dir)
