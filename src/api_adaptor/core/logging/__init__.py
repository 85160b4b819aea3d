"""
Logging system for API Adaptor.

Structured logging with JSON/text formats, console and rotating file
handlers, and per-operation correlation ids.

Example:
    >>> from api_adaptor.core.logging import LoggingConfig, APIAdaptorLogger
    >>>
    >>> config = LoggingConfig.create(level="DEBUG", format="json")
    >>> logger = APIAdaptorLogger(config)
    >>> logger.info("Request started", method="GET", url="https://api.test")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import APIAdaptorLogger, PACKAGE_LOGGER_NAME, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    new_correlation_id,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import build_handlers, create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "APIAdaptorLogger",
    "PACKAGE_LOGGER_NAME",
    "get_logger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "new_correlation_id",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "build_handlers",
    "create_console_handler",
    "create_file_handler",
]
