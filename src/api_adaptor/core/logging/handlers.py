"""
Log handlers for console and rotating file output.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import IO, List, Optional

from .config import LoggingConfig
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter


def _prepare(handler: logging.Handler, level: int, formatter: logging.Formatter,
             filters: Optional[List[logging.Filter]]) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    for f in filters or []:
        handler.addFilter(f)
    return handler


def create_console_handler(
    level: int,
    formatter: logging.Formatter,
    filters: Optional[List[logging.Filter]] = None,
    stream: Optional[IO[str]] = None
) -> logging.StreamHandler:
    """Create a stream handler writing to ``stream`` (stdout by default)."""
    return _prepare(logging.StreamHandler(stream or sys.stdout), level, formatter, filters)


def create_file_handler(
    file_path: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    filters: Optional[List[logging.Filter]] = None
) -> RotatingFileHandler:
    """
    Create rotating file handler.

    The parent directory is created if missing. Rotated files are kept as
    app.log.1 ... app.log.<backup_count>.
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    return _prepare(handler, level, formatter, filters)


def build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """All handlers described by ``config``, sharing one formatter and filter set."""
    level = getattr(logging, config.level.value)
    formatter = get_formatter(config.format.value)

    filters: List[logging.Filter] = []
    if config.enable_correlation_id:
        filters.append(CorrelationIdFilter())
    if config.extra_fields:
        filters.append(ExtraFieldsFilter(config.extra_fields))

    handlers: List[logging.Handler] = []
    if config.enable_console:
        handlers.append(create_console_handler(level, formatter, filters))
    if config.enable_file and config.file_path:
        handlers.append(create_file_handler(
            config.file_path,
            level,
            formatter,
            max_bytes=config.max_bytes,
            backup_count=config.backup_count,
            filters=filters,
        ))
    return handlers
