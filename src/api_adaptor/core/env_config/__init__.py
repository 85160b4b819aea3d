"""
Environment configuration for API Adaptor.

Load client configuration from .env files and environment variables.

Example:
    >>> from api_adaptor.core.env_config import load_from_env
    >>>
    >>> config = load_from_env()
    >>> config = load_from_env(env_file=".env.production", timeout=10)
"""

from .loader import load_from_env, print_config_summary
from .validator import AppIdentity, ClientSettings

__all__ = [
    "load_from_env",
    "print_config_summary",
    "AppIdentity",
    "ClientSettings",
]
