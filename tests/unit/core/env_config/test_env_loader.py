"""
Tests for loading ClientConfig from the environment.
"""

import pytest
from pydantic import ValidationError

from api_adaptor.core.env_config import AppIdentity, ClientSettings, load_from_env, print_config_summary
from api_adaptor.core.exceptions import ConfigurationError
from api_adaptor.core.logging.config import LogFormat, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """No API_ADAPTOR_* variables and no stray .env file in the working directory."""
    monkeypatch.chdir(tmp_path)
    for name in list(ClientSettings.model_fields):
        monkeypatch.delenv(f"API_ADAPTOR_{name.upper()}", raising=False)


class TestLoadFromEnv:

    def test_defaults(self):
        config = load_from_env()

        assert config.timeout == 4
        assert config.max_redirects == 3
        assert config.allow_cross_origin_redirects is True
        assert config.forward_auth_on_cross_origin_redirects is False
        assert config.follow_non_get_redirects is False
        assert config.bearer_token is None
        assert config.basic_auth is None
        assert config.logging is None

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_TIMEOUT", "10")
        monkeypatch.setenv("API_ADAPTOR_MAX_REDIRECTS", "5")
        monkeypatch.setenv("API_ADAPTOR_ALLOW_CROSS_ORIGIN_REDIRECTS", "false")
        monkeypatch.setenv("API_ADAPTOR_BEARER_TOKEN", "secret-token")

        config = load_from_env()

        assert config.timeout == 10
        assert config.max_redirects == 5
        assert config.allow_cross_origin_redirects is False
        assert config.bearer_token == "secret-token"

    def test_negative_redirects_clamped(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_MAX_REDIRECTS", "-2")
        assert load_from_env().max_redirects == 0

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_MAX_REDIRECTS", "5")
        config = load_from_env(max_redirects=1, follow_non_get_redirects=True)

        assert config.max_redirects == 1
        assert config.follow_non_get_redirects is True

    def test_unknown_override_rejected(self):
        with pytest.raises(ConfigurationError, match="timeot"):
            load_from_env(timeot=5)

    def test_override_can_clear_value(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_BEARER_TOKEN", "secret-token")
        assert load_from_env(bearer_token=None).bearer_token is None

    def test_basic_auth_pair(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_BASIC_AUTH_USER", "alice")
        monkeypatch.setenv("API_ADAPTOR_BASIC_AUTH_PASSWORD", "pw")

        assert load_from_env().basic_auth == ("alice", "pw")

    def test_basic_auth_half_pair_rejected(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_BASIC_AUTH_USER", "alice")
        with pytest.raises(ValidationError):
            load_from_env()

    def test_invalid_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("API_ADAPTOR_TIMEOUT", "0")
        with pytest.raises(ValidationError):
            load_from_env()

    def test_logging_enabled(self, monkeypatch, tmp_path):
        monkeypatch.setenv("API_ADAPTOR_LOG_ENABLED", "true")
        monkeypatch.setenv("API_ADAPTOR_LOG_LEVEL", "debug")
        monkeypatch.setenv("API_ADAPTOR_LOG_FORMAT", "json")
        monkeypatch.setenv("API_ADAPTOR_LOG_FILE_PATH", str(tmp_path / "a.log"))

        logging_config = load_from_env().logging

        assert logging_config.level == LogLevel.DEBUG
        assert logging_config.format == LogFormat.JSON
        assert logging_config.enable_file is True
        assert logging_config.file_path == str(tmp_path / "a.log")

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("API_ADAPTOR_TIMEOUT=7\nAPI_ADAPTOR_VERIFY_SSL=false\n")

        config = load_from_env(env_file=str(env_file))

        assert config.timeout == 7
        assert config.verify_ssl is False

    def test_default_env_file_in_working_directory(self, tmp_path):
        (tmp_path / ".env").write_text("API_ADAPTOR_MAX_REDIRECTS=9\n")
        assert load_from_env().max_redirects == 9

    def test_environment_beats_env_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("API_ADAPTOR_MAX_REDIRECTS=9\n")
        monkeypatch.setenv("API_ADAPTOR_MAX_REDIRECTS", "2")
        assert load_from_env().max_redirects == 2


class TestAppIdentity:

    def test_placeholders(self):
        assert AppIdentity().user_agent() == (
            "Python ApiAdaptor App/Version not stated (Contact not stated)"
        )

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("APP_NAME", "billing")
        monkeypatch.setenv("APP_VERSION", "2.1")
        monkeypatch.setenv("APP_CONTACT", "ops@example.com")

        assert AppIdentity().user_agent() == "billing/2.1 (ops@example.com)"


class TestPrintConfigSummary:

    def test_secrets_masked(self, capsys):
        print_config_summary(load_from_env(bearer_token="secret-token-123"))

        out = capsys.readouterr().out
        assert "ClientConfig:" in out
        assert "bearer_token: ***-123" in out
        assert "secret-token-123" not in out

    def test_unmasked(self, capsys):
        print_config_summary(load_from_env(bearer_token="secret-token-123"), mask_secrets=False)
        assert "secret-token-123" in capsys.readouterr().out

    def test_basic_auth_user_only(self, capsys):
        print_config_summary(load_from_env(basic_auth=("alice", "pw")))

        out = capsys.readouterr().out
        assert "user=alice" in out
        assert "pw" not in out
