"""
Система конфигурации для API Adaptor.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple, Union, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig

DEFAULT_TIMEOUT_IN_SECONDS = 4
DEFAULT_MAX_REDIRECTS = 3

BasicAuth = Union[Tuple[str, str], Mapping[str, str]]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLIENT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _normalize_basic_auth(basic_auth: Optional[BasicAuth]) -> Optional[Tuple[str, str]]:
    """
    Привести basic auth к кортежу (user, password).

    Принимает кортеж/список из двух элементов или mapping с ключами
    user и password.
    """
    if basic_auth is None:
        return None

    if isinstance(basic_auth, Mapping):
        if 'user' not in basic_auth or 'password' not in basic_auth:
            raise ConfigurationError("basic_auth mapping must have 'user' and 'password'")
        return (str(basic_auth['user']), str(basic_auth['password']))

    if isinstance(basic_auth, (tuple, list)) and len(basic_auth) == 2:
        return (str(basic_auth[0]), str(basic_auth[1]))

    raise ConfigurationError("basic_auth must be (user, password)")


@dataclass(frozen=True)
class ClientConfig:
    """
    Конфигурация JSONClient.

    Args:
        max_redirects: Максимум редиректов за одну операцию (отрицательные -> 0)
        allow_cross_origin_redirects: Разрешать редиректы на другой origin
        forward_auth_on_cross_origin_redirects: Отправлять учётные данные
            на другой origin (небезопасно, по умолчанию выключено)
        follow_non_get_redirects: Следовать 307/308 для POST/PUT/PATCH/DELETE
        timeout: Таймаут подключения и чтения (сек), строго положительный
        bearer_token: Токен для заголовка Authorization: Bearer
        basic_auth: (user, password) для Basic аутентификации
        verify_ssl: Проверять SSL сертификаты
        logging: Конфигурация логирования (None = без логов)

    Examples:
        >>> ClientConfig(bearer_token="secret", max_redirects=5)
        >>> ClientConfig.create(timeout=10, basic_auth={"user": "u", "password": "p"})
    """
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    allow_cross_origin_redirects: bool = True
    forward_auth_on_cross_origin_redirects: bool = False
    follow_non_get_redirects: bool = False
    timeout: float = DEFAULT_TIMEOUT_IN_SECONDS
    bearer_token: Optional[str] = None
    basic_auth: Optional[Tuple[str, str]] = None
    verify_ssl: bool = True
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Валидация и нормализация."""
        if self.timeout is None:
            raise ConfigurationError("It is no longer possible to disable the timeout.")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

        max_redirects = int(self.max_redirects)
        object.__setattr__(self, 'max_redirects', max(0, max_redirects))

        object.__setattr__(self, 'basic_auth', _normalize_basic_auth(self.basic_auth))

        if self.bearer_token and self.basic_auth:
            raise ConfigurationError("Use either bearer_token or basic_auth, not both")

    @property
    def has_credentials(self) -> bool:
        return bool(self.bearer_token) or self.basic_auth is not None

    def forwards_credentials(self, cross_origin: bool) -> bool:
        """Отправлять ли учётные данные на хоп с данным cross_origin."""
        return not cross_origin or self.forward_auth_on_cross_origin_redirects

    @classmethod
    def create(
        cls,
        timeout: Optional[float] = DEFAULT_TIMEOUT_IN_SECONDS,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        bearer_token: Optional[str] = None,
        basic_auth: Optional[BasicAuth] = None,
        disable_timeout: bool = False,
        **kwargs: Any
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            timeout: Таймаут (сек); None означает значение по умолчанию
            max_redirects: Максимум редиректов
            bearer_token: Bearer токен
            basic_auth: (user, password) или {"user": ..., "password": ...}
            disable_timeout: Устаревший флаг, всегда ошибка
            **kwargs: Остальные поля ClientConfig

        Returns:
            ClientConfig instance

        Examples:
            >>> config = ClientConfig.create(timeout=10, follow_non_get_redirects=True)
        """
        if disable_timeout:
            raise ConfigurationError("It is no longer possible to disable the timeout.")

        return cls(
            timeout=DEFAULT_TIMEOUT_IN_SECONDS if timeout is None else timeout,
            max_redirects=max_redirects,
            bearer_token=bearer_token,
            basic_auth=basic_auth,
            **kwargs
        )

    def with_timeout(self, timeout: float) -> 'ClientConfig':
        """
        Создать новый конфиг с изменённым timeout.

        Example:
            >>> new_config = config.with_timeout(10)
        """
        return replace(self, timeout=timeout)

    def with_max_redirects(self, max_redirects: int) -> 'ClientConfig':
        """Создать новый конфиг с изменённым лимитом редиректов."""
        return replace(self, max_redirects=max_redirects)

    def with_bearer_token(self, token: Optional[str]) -> 'ClientConfig':
        """Создать новый конфиг с bearer токеном (basic auth сбрасывается)."""
        return replace(self, bearer_token=token, basic_auth=None)

    def with_basic_auth(self, user: str, password: str) -> 'ClientConfig':
        """Создать новый конфиг с basic auth (bearer токен сбрасывается)."""
        return replace(self, bearer_token=None, basic_auth=(user, password))
