"""
Configuration loader from environment variables and .env files.

Main entry point for loading configuration.
"""

from dataclasses import fields
from typing import Any, Optional

from ..config import ClientConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from ...utils.sanitizer import mask_secret
from .validator import ClientSettings

_UNSET = object()


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> ClientConfig:
    """
    Load ClientConfig from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (API_ADAPTOR_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path
        **overrides: Explicit ClientConfig field overrides

    Returns:
        ClientConfig instance

    Raises:
        ConfigurationError: an override is not a ClientConfig field

    Example:
        >>> config = load_from_env()
        >>> config = load_from_env(env_file=".env.production", max_redirects=1)
    """
    unknown = set(overrides) - {f.name for f in fields(ClientConfig)}
    if unknown:
        raise ConfigurationError(f"Unknown ClientConfig option(s): {', '.join(sorted(unknown))}")

    if env_file is not None:
        settings = ClientSettings(_env_file=env_file)
    else:
        settings = ClientSettings()

    def pick(name: str, default: Any) -> Any:
        value = overrides.get(name, _UNSET)
        return default if value is _UNSET else value

    basic_auth = None
    if settings.basic_auth_user is not None:
        basic_auth = (settings.basic_auth_user, settings.basic_auth_password)

    logging_config = None
    if settings.log_enabled:
        logging_config = LoggingConfig.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_file_path is not None,
            file_path=settings.log_file_path,
        )

    return ClientConfig(
        timeout=pick('timeout', settings.timeout),
        max_redirects=pick('max_redirects', settings.max_redirects),
        allow_cross_origin_redirects=pick(
            'allow_cross_origin_redirects', settings.allow_cross_origin_redirects
        ),
        forward_auth_on_cross_origin_redirects=pick(
            'forward_auth_on_cross_origin_redirects',
            settings.forward_auth_on_cross_origin_redirects,
        ),
        follow_non_get_redirects=pick('follow_non_get_redirects', settings.follow_non_get_redirects),
        bearer_token=pick('bearer_token', settings.bearer_token),
        basic_auth=pick('basic_auth', basic_auth),
        verify_ssl=pick('verify_ssl', settings.verify_ssl),
        logging=pick('logging', logging_config),
    )


def print_config_summary(config: ClientConfig, mask_secrets: bool = True):
    """
    Print configuration summary.

    Example:
        >>> print_config_summary(load_from_env())
        ClientConfig:
          timeout: 4s
          ...
    """
    token = config.bearer_token
    if token and mask_secrets:
        token = mask_secret(token)

    print("ClientConfig:")
    print(f"  timeout: {config.timeout}s")
    print(f"  redirects: max={config.max_redirects}, cross_origin={config.allow_cross_origin_redirects}, "
          f"forward_auth={config.forward_auth_on_cross_origin_redirects}, "
          f"non_get={config.follow_non_get_redirects}")
    print(f"  verify_ssl: {config.verify_ssl}")
    if token:
        print(f"  bearer_token: {token}")
    if config.basic_auth:
        print(f"  basic_auth: user={config.basic_auth[0]}")
    if config.logging:
        print(f"  logging: level={config.logging.level.value}, format={config.logging.format.value}")
