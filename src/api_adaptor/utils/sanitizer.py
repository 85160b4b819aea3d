"""
Маскирование чувствительных данных перед записью в лог.

Защищает токены, пароли и заголовки авторизации от попадания в логи
клиента.
"""

import re
from typing import Any, Dict, Mapping

MASK = "***REDACTED***"

# Ключи (case-insensitive), значения которых маскируются целиком.
# Ключ считается чувствительным, если совпадает полностью или одна из его
# частей (через _ или -) есть в наборе.
SENSITIVE_KEYS = {
    'password', 'passwd', 'secret', 'token', 'bearer', 'jwt',
    'authorization', 'proxy-authorization', 'auth',
    'cookie', 'set-cookie', 'api_key', 'apikey', 'credentials',
}

SENSITIVE_PATTERNS = [
    # Authorization: Bearer <token> / Basic <base64>
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1' + MASK),
    # key=value в query string
    (re.compile(r'((?:api[_-]?key|token|password)=)([^\s&,;]+)', re.IGNORECASE), r'\1' + MASK),
    # user:password@host
    (re.compile(r'(://[^:/@\s]+:)([^@/\s]+)(@)'), r'\1' + MASK + r'\3'),
]


def _is_sensitive_key(key: Any) -> bool:
    key = str(key).lower()
    if key in SENSITIVE_KEYS:
        return True
    return any(part in SENSITIVE_KEYS for part in re.split(r'[_\-]', key))


def _mask_string(text: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def mask_sensitive_data(data: Any) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках и строках.

    Возвращает копию; исходные данные не изменяются.

    Examples:
        >>> mask_sensitive_data({"Authorization": "Bearer abc", "Accept": "application/json"})
        {'Authorization': '***REDACTED***', 'Accept': 'application/json'}

        >>> mask_sensitive_data("https://api.test/x?token=abc&page=2")
        'https://api.test/x?token=***REDACTED***&page=2'
    """
    if isinstance(data, str):
        return _mask_string(data)

    if isinstance(data, Mapping):
        return {
            key: MASK if _is_sensitive_key(key) else mask_sensitive_data(value)
            for key, value in data.items()
        }

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item) for item in data)

    return data


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Маскирует заголовки HTTP (Authorization, Cookie и т.п.)."""
    return mask_sensitive_data(dict(headers))


def mask_secret(value: str, visible: int = 4) -> str:
    """
    Маскирует секрет, оставляя несколько последних символов.

    Example:
        >>> mask_secret("secret-token-123")
        '***-123'
    """
    if len(value) <= visible:
        return "***"
    return "***" + value[-visible:]
