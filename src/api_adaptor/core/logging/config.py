"""
Logging configuration for API Adaptor.

Provides configuration classes for structured logging.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

from ..exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Configuration for client logging.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format (json, text)
        enable_console: Log to stdout
        enable_file: Log to a rotating file
        file_path: Path to log file (required if enable_file=True)
        max_bytes: Max log file size before rotation (default: 10MB)
        backup_count: Number of rotated files to keep
        enable_correlation_id: Tag every record with the operation's correlation id
        extra_fields: Static fields added to every record
        logger_name: Name of the underlying stdlib logger

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    enable_correlation_id: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)
    logger_name: str = "api_adaptor"

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ConfigurationError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ConfigurationError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ConfigurationError("backup_count cannot be negative")

    @classmethod
    def create(
        cls,
        level: str = "INFO",
        format: str = "text",
        enable_console: bool = True,
        enable_file: bool = False,
        file_path: Optional[str] = None,
        extra_fields: Optional[Dict[str, Any]] = None,
        **kwargs: Any
    ) -> "LoggingConfig":
        """
        Create LoggingConfig from string values.

        Raises:
            ConfigurationError: unknown level or format

        Example:
            >>> config = LoggingConfig.create(
            ...     level="debug",
            ...     format="json",
            ...     enable_file=True,
            ...     file_path="/tmp/api_adaptor.log"
            ... )
        """
        try:
            log_level = LogLevel(level.upper())
            log_format = LogFormat(format.lower())
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        return cls(
            level=log_level,
            format=log_format,
            enable_console=enable_console,
            enable_file=enable_file,
            file_path=file_path,
            extra_fields=extra_fields or {},
            **kwargs
        )
