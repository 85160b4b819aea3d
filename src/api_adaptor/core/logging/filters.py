"""
Log filters for adding context to records.

The correlation id is stored per thread and set by the request engine for
the duration of one logical operation, so every record of a redirect chain
shares it.
"""

import logging
import threading
import uuid
from typing import Dict, Any, Optional


_correlation_id_storage = threading.local()


def new_correlation_id() -> str:
    """Generate a short random correlation id."""
    return uuid.uuid4().hex[:12]


def set_correlation_id(correlation_id: str) -> None:
    """
    Set correlation ID for current thread.

    Example:
        >>> set_correlation_id("op-12345")
        >>> logger.info("Request started")  # Will include correlation_id
    """
    _correlation_id_storage.value = correlation_id


def get_correlation_id() -> Optional[str]:
    """Correlation ID of the current thread, or None."""
    return getattr(_correlation_id_storage, 'value', None)


def clear_correlation_id() -> None:
    if hasattr(_correlation_id_storage, 'value'):
        delattr(_correlation_id_storage, 'value')


class CorrelationIdFilter(logging.Filter):
    """
    Adds the current thread's correlation id to log records.

    Example:
        >>> handler.addFilter(CorrelationIdFilter())
        >>> set_correlation_id("op-12345")
        >>> logger.info("Redirect followed")  # correlation_id=op-12345
    """

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields (service name, environment, ...) to every record.

    Fields already present on the record are left untouched.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "billing-client"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
