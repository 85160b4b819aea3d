"""
Pydantic settings for environment configuration.

Provides validated models for client options and the application
identity used in the User-Agent header.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppIdentity(BaseSettings):
    """
    Application identity sent in the User-Agent header.

    Reads APP_NAME, APP_VERSION and APP_CONTACT; each falls back to a
    placeholder when unset.

    Example:
        >>> AppIdentity().user_agent()
        'Python ApiAdaptor App/Version not stated (Contact not stated)'
    """

    model_config = SettingsConfigDict(
        env_prefix='APP_',
        case_sensitive=False,
        extra='ignore',
    )

    name: str = Field(default="Python ApiAdaptor App")
    version: str = Field(default="Version not stated")
    contact: str = Field(default="Contact not stated")

    def user_agent(self) -> str:
        return f"{self.name}/{self.version} ({self.contact})"


class ClientSettings(BaseSettings):
    """
    JSONClient configuration from environment variables.

    Reads from:
    1. Environment variables (API_ADAPTOR_*)
    2. .env file
    3. Defaults

    Example .env file:
        API_ADAPTOR_TIMEOUT=10
        API_ADAPTOR_MAX_REDIRECTS=5
        API_ADAPTOR_ALLOW_CROSS_ORIGIN_REDIRECTS=false
        API_ADAPTOR_BEARER_TOKEN=secret-token-123
        API_ADAPTOR_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='API_ADAPTOR_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Redirects / timeouts
    timeout: float = Field(default=4.0, gt=0, description="Connect and read timeout in seconds")
    max_redirects: int = Field(default=3, description="Negative values are treated as 0")
    allow_cross_origin_redirects: bool = Field(default=True)
    forward_auth_on_cross_origin_redirects: bool = Field(default=False)
    follow_non_get_redirects: bool = Field(default=False)
    verify_ssl: bool = Field(default=True)

    # Credentials
    bearer_token: Optional[str] = Field(default=None)
    basic_auth_user: Optional[str] = Field(default=None)
    basic_auth_password: Optional[str] = Field(default=None)

    # Logging
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_file_path: Optional[str] = None

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode='after')
    def validate_basic_auth_pair(self) -> 'ClientSettings':
        """basic_auth_user and basic_auth_password must be set together."""
        if (self.basic_auth_user is None) != (self.basic_auth_password is None):
            raise ValueError("basic_auth_user and basic_auth_password must be set together")
        return self
