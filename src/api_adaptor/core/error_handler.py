# src/api_adaptor/core/error_handler.py

import json
from typing import Any, Optional

from .exceptions import (
    ERROR_CLASSES_BY_STATUS,
    APIAdaptorError,
    EndpointNotFound,
    HTTPClientError,
    HTTPErrorResponse,
    HTTPServerError,
    InvalidUrl,
    SocketError,
    TimedOut,
)
from .transport import TransportFailure, TransportFailureKind


class ErrorHandler:
    """Классифицирует ошибки транспорта и HTTP статусы в исключения API Adaptor"""

    @staticmethod
    def error_class_for_status(status_code: int) -> type:
        """Класс исключения для HTTP статуса (тотальная функция)"""

        error_class = ERROR_CLASSES_BY_STATUS.get(status_code)
        if error_class is not None:
            return error_class

        if 400 <= status_code < 500:
            return HTTPClientError

        if 500 <= status_code < 600:
            return HTTPServerError

        return HTTPErrorResponse

    @staticmethod
    def parse_error_details(body: Optional[str]) -> Optional[Any]:
        """JSON тела ошибки, либо None если тело пустое или не JSON"""

        if not body:
            return None
        try:
            return json.loads(body)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def build_http_error(status_code: int, url: str, body: Optional[str] = None) -> APIAdaptorError:
        """
        Строит исключение для HTTP ответа с ошибочным статусом.

        408 считается таймаутом, а не клиентской ошибкой.

        Args:
            status_code: HTTP статус
            url: URL запроса
            body: Сырое тело ответа

        Returns:
            Исключение (не выбрасывает его)
        """

        if status_code == 408:
            return TimedOut(f"Request timed out (HTTP 408) for {url}", url)

        message = f"URL: {url}\nResponse body:\n{body or ''}"
        error_class = ErrorHandler.error_class_for_status(status_code)
        return error_class(
            status_code,
            message,
            ErrorHandler.parse_error_details(body),
            body,
        )

    @staticmethod
    def classify_transport_failure(failure: TransportFailure, url: str) -> APIAdaptorError:
        """Преобразует сбой транспорта в исключение таксономии"""

        kind = failure.kind

        if kind is TransportFailureKind.CONNECTION_REFUSED:
            return EndpointNotFound(url)

        elif kind in (TransportFailureKind.TIMEOUT, TransportFailureKind.CONNECTION_RESET):
            return TimedOut(str(failure) or f"Request timed out for {url}", url)

        elif kind is TransportFailureKind.INVALID_URL:
            return InvalidUrl(str(failure) or f"Invalid URL: {url}")

        else:
            return SocketError(str(failure) or f"Socket error for {url}", url)
