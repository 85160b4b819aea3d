"""
Structured logger for API Adaptor.

Wraps a stdlib logger; keyword arguments become record fields and are
masked with ``mask_sensitive_data`` before they reach any handler.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig
from .handlers import build_handlers
from ...utils.sanitizer import mask_sensitive_data

PACKAGE_LOGGER_NAME = "api_adaptor"


class APIAdaptorLogger:
    """
    Structured logger.

    Without a config the logger only wraps ``logging.getLogger(name)`` and
    leaves its handlers alone, so output is whatever the application has
    configured (nothing by default, thanks to the package NullHandler).
    With a config it owns the logger: level, handlers and filters come from
    the config and records do not propagate to the root logger.

    Example:
        >>> config = LoggingConfig.create(level="DEBUG", format="json")
        >>> logger = APIAdaptorLogger(config)
        >>> logger.info("Request started", method="GET", url="https://api.test/a")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: Optional[str] = None):
        self.config = config
        self.name = name or (config.logger_name if config else PACKAGE_LOGGER_NAME)
        self._logger = logging.getLogger(self.name)
        self._closed = False

        if config is not None:
            self._logger.setLevel(getattr(logging, config.level.value))
            self._logger.propagate = False
            self._close_handlers()
            for handler in build_handlers(config):
                self._logger.addHandler(handler)

    @property
    def stdlib_logger(self) -> logging.Logger:
        return self._logger

    def log(self, level: int, message: str, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra=mask_sensitive_data(kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Example:
            >>> logger.info("Request completed", status_code=200, exchanges=2)
        """
        self.log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log(logging.ERROR, message, **kwargs)

    def _close_handlers(self) -> None:
        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

    def close(self) -> None:
        """
        Flush and close the handlers this logger installed.

        Idempotent; a logger created without a config has nothing to close.
        """
        if self._closed:
            return
        if self.config is not None:
            self._close_handlers()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_logger: Optional[APIAdaptorLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> APIAdaptorLogger:
    """
    Get the global logger instance, creating it on first call.

    Example:
        >>> logger = get_logger()
        >>> logger.info("Hello")
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = APIAdaptorLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> APIAdaptorLogger:
    """
    Replace the global logger with one built from ``config``.

    Example:
        >>> logger = configure_logging(LoggingConfig.create(level="DEBUG"))
    """
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
    _default_logger = APIAdaptorLogger(config)
    return _default_logger
