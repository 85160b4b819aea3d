"""
Иерархия исключений API Adaptor.

Плоская классификация:
- Транспортные ошибки (InvalidUrl, TimedOut, EndpointNotFound, SocketError)
- Ошибки протокола редиректов (TooManyRedirects, RedirectLocationMissing)
- HTTPErrorResponse - одно семейство для всех 4xx/5xx, помеченное HTTPErrorKind

Принадлежность к семейству (client/server/intermittent) - предикат над kind,
а не наследование.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class APIAdaptorError(Exception):
    """Базовое исключение API Adaptor."""

    retryable: bool = False

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ConfigurationError(APIAdaptorError, ValueError):
    """Невалидная конфигурация клиента."""
    pass

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ТРАНСПОРТНЫЕ ОШИБКИ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InvalidUrl(APIAdaptorError):
    """URL не удалось разобрать (пробелы, нет схемы/хоста, битый порт)."""
    pass


class TimedOut(APIAdaptorError):
    """
    Таймаут запроса.

    Включает connect/read таймауты, сброс соединения и HTTP 408.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
    """

    def __init__(self, message: str = "", url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class EndpointNotFound(APIAdaptorError):
    """Соединение отклонено (connection refused)."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Could not connect to {url}")


class SocketError(APIAdaptorError):
    """Ошибка на уровне сокета (DNS, сеть недоступна и т.п.)."""

    def __init__(self, message: str = "", url: Optional[str] = None):
        self.url = url
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# РЕДИРЕКТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TooManyRedirects(APIAdaptorError):
    """
    Исчерпан лимит редиректов.

    Args:
        max_redirects: Настроенный лимит
        url: Исходный URL запроса
    """

    def __init__(self, max_redirects: int, url: str):
        self.max_redirects = max_redirects
        self.url = url
        super().__init__(
            f"Too many redirects (max {max_redirects}) while requesting {url}"
        )


class RedirectLocationMissing(APIAdaptorError):
    """Ответ-редирект без заголовка Location."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Redirect response missing Location header for {url}")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ОШИБКИ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPErrorKind(str, Enum):
    """Вид HTTP ошибки."""
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    GONE = "gone"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNPROCESSABLE_ENTITY = "unprocessable_entity"
    TOO_MANY_REQUESTS = "too_many_requests"
    CLIENT_ERROR = "client_error"

    INTERNAL_SERVER_ERROR = "internal_server_error"
    BAD_GATEWAY = "bad_gateway"
    UNAVAILABLE = "unavailable"
    GATEWAY_TIMEOUT = "gateway_timeout"
    SERVER_ERROR = "server_error"

    # Статус вне 4xx/5xx (например, не пройденный 3xx)
    HTTP_ERROR = "http_error"


CLIENT_ERROR_KINDS: FrozenSet[HTTPErrorKind] = frozenset({
    HTTPErrorKind.BAD_REQUEST,
    HTTPErrorKind.UNAUTHORIZED,
    HTTPErrorKind.FORBIDDEN,
    HTTPErrorKind.NOT_FOUND,
    HTTPErrorKind.CONFLICT,
    HTTPErrorKind.GONE,
    HTTPErrorKind.PAYLOAD_TOO_LARGE,
    HTTPErrorKind.UNPROCESSABLE_ENTITY,
    HTTPErrorKind.TOO_MANY_REQUESTS,
    HTTPErrorKind.CLIENT_ERROR,
})

SERVER_ERROR_KINDS: FrozenSet[HTTPErrorKind] = frozenset({
    HTTPErrorKind.INTERNAL_SERVER_ERROR,
    HTTPErrorKind.BAD_GATEWAY,
    HTTPErrorKind.UNAVAILABLE,
    HTTPErrorKind.GATEWAY_TIMEOUT,
    HTTPErrorKind.SERVER_ERROR,
})

INTERMITTENT_CLIENT_ERROR_KINDS: FrozenSet[HTTPErrorKind] = frozenset({
    HTTPErrorKind.TOO_MANY_REQUESTS,
})

INTERMITTENT_SERVER_ERROR_KINDS: FrozenSet[HTTPErrorKind] = frozenset({
    HTTPErrorKind.BAD_GATEWAY,
    HTTPErrorKind.UNAVAILABLE,
    HTTPErrorKind.GATEWAY_TIMEOUT,
})


class HTTPErrorResponse(APIAdaptorError):
    """
    HTTP ответ с ошибочным статусом.

    Args:
        status_code: HTTP статус
        message: Сообщение (URL + тело ответа)
        error_details: Распарсенный JSON тела, если он валиден
        http_body: Сырое тело ответа

    Examples:
        >>> try:
        ...     client.get_json(url)
        ... except HTTPErrorResponse as e:
        ...     if e.is_intermittent:
        ...         schedule_retry()
    """

    kind: HTTPErrorKind = HTTPErrorKind.HTTP_ERROR

    def __init__(
        self,
        status_code: int,
        message: str = "",
        error_details: Optional[Any] = None,
        http_body: Optional[str] = None,
    ):
        self.status_code = status_code
        self.error_details = error_details
        self.http_body = http_body
        super().__init__(message)

    @property
    def code(self) -> int:
        """Алиас status_code."""
        return self.status_code

    @property
    def is_client_error(self) -> bool:
        return self.kind in CLIENT_ERROR_KINDS

    @property
    def is_server_error(self) -> bool:
        return self.kind in SERVER_ERROR_KINDS

    @property
    def is_intermittent_client_error(self) -> bool:
        return self.kind in INTERMITTENT_CLIENT_ERROR_KINDS

    @property
    def is_intermittent_server_error(self) -> bool:
        return self.kind in INTERMITTENT_SERVER_ERROR_KINDS

    @property
    def is_intermittent(self) -> bool:
        """Вызывающий код может безопасно повторить запрос (429, 502, 503, 504)."""
        return self.is_intermittent_client_error or self.is_intermittent_server_error

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.is_intermittent

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, kind={self.kind.value!r})"


# Один уровень подклассов: только имя + kind, чтобы ловить по имени.

class HTTPClientError(HTTPErrorResponse):
    """
    Прочие 4xx, для которых нет отдельного класса (418, 451, ...).

    Не базовый класс семейства: `except HTTPClientError` не ловит
    HTTPNotFound или HTTPTooManyRequests. Для всех 4xx используйте
    `HTTPErrorResponse` и `is_client_error`.
    """
    kind = HTTPErrorKind.CLIENT_ERROR


class HTTPBadRequest(HTTPErrorResponse):
    """400 Bad Request."""
    kind = HTTPErrorKind.BAD_REQUEST


class HTTPUnauthorized(HTTPErrorResponse):
    """401 Unauthorized."""
    kind = HTTPErrorKind.UNAUTHORIZED


class HTTPForbidden(HTTPErrorResponse):
    """403 Forbidden."""
    kind = HTTPErrorKind.FORBIDDEN


class HTTPNotFound(HTTPErrorResponse):
    """404 Not Found."""
    kind = HTTPErrorKind.NOT_FOUND


class HTTPConflict(HTTPErrorResponse):
    """409 Conflict."""
    kind = HTTPErrorKind.CONFLICT


class HTTPGone(HTTPErrorResponse):
    """410 Gone."""
    kind = HTTPErrorKind.GONE


class HTTPPayloadTooLarge(HTTPErrorResponse):
    """413 Payload Too Large."""
    kind = HTTPErrorKind.PAYLOAD_TOO_LARGE


class HTTPUnprocessableEntity(HTTPErrorResponse):
    """422 Unprocessable Entity."""
    kind = HTTPErrorKind.UNPROCESSABLE_ENTITY


class HTTPTooManyRequests(HTTPErrorResponse):
    """429 Too Many Requests (intermittent)."""
    kind = HTTPErrorKind.TOO_MANY_REQUESTS


class HTTPServerError(HTTPErrorResponse):
    """
    Прочие 5xx, для которых нет отдельного класса (501, 599, ...).

    Не базовый класс семейства: `except HTTPServerError` не ловит
    HTTPInternalServerError или HTTPUnavailable. Для всех 5xx используйте
    `HTTPErrorResponse` и `is_server_error`.
    """
    kind = HTTPErrorKind.SERVER_ERROR


class HTTPInternalServerError(HTTPErrorResponse):
    """500 Internal Server Error."""
    kind = HTTPErrorKind.INTERNAL_SERVER_ERROR


class HTTPBadGateway(HTTPErrorResponse):
    """502 Bad Gateway (intermittent)."""
    kind = HTTPErrorKind.BAD_GATEWAY


class HTTPUnavailable(HTTPErrorResponse):
    """503 Service Unavailable (intermittent)."""
    kind = HTTPErrorKind.UNAVAILABLE


class HTTPGatewayTimeout(HTTPErrorResponse):
    """504 Gateway Timeout (intermittent)."""
    kind = HTTPErrorKind.GATEWAY_TIMEOUT


ERROR_CLASSES_BY_STATUS: Dict[int, type] = {
    400: HTTPBadRequest,
    401: HTTPUnauthorized,
    403: HTTPForbidden,
    404: HTTPNotFound,
    409: HTTPConflict,
    410: HTTPGone,
    413: HTTPPayloadTooLarge,
    422: HTTPUnprocessableEntity,
    429: HTTPTooManyRequests,
    500: HTTPInternalServerError,
    502: HTTPBadGateway,
    503: HTTPUnavailable,
    504: HTTPGatewayTimeout,
}
