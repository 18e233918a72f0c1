# =============================================================================
# File: tests/test_config.py
# Description: Settings parsing and helpers
# =============================================================================

import pytest

from collabhub.common.base.base_config import BASE_CONFIG_DICT
from collabhub.config.cors_config import CorsConfig
from collabhub.config.email_config import EmailConfig
from collabhub.config.jwt_config import JWTConfig
from collabhub.config.pg_client_config import DatabaseConfig
from collabhub.config.realtime_config import RealtimeConfig, get_realtime_config, reset_realtime_config


class TestRealtimeConfig:

    @pytest.mark.parametrize("reason", ["transport close", "Ping Timeout", 1000, "1001", 1006])
    def test_expected(self, reason):
        assert RealtimeConfig().is_expected_disconnect(reason)

    @pytest.mark.parametrize("reason", ["server error: boom", 1011, "", None])
    def test_unexpected(self, reason):
        assert not RealtimeConfig().is_expected_disconnect(reason)

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("REALTIME_NOTIFICATION_PREVIEW_LENGTH", "80")
        reset_realtime_config()
        try:
            assert get_realtime_config().notification_preview_length == 80
        finally:
            reset_realtime_config()

    def test_defaults(self):
        config = RealtimeConfig()
        assert config.notification_preview_length == 120
        assert config.notification_ellipsis == "..."
        assert config.require_auth is False


class TestSecrets:

    def test_smtp_password_hidden_in_repr(self):
        config = EmailConfig(smtp_host="smtp.example.com", smtp_password="hunter2")
        assert "hunter2" not in repr(config)
        assert config.smtp_password.get_secret_value() == "hunter2"

    def test_jwt_secret_required(self):
        with pytest.raises(RuntimeError):
            JWTConfig(secret_key="").validate_config()

    def test_jwt_unsupported_algorithm(self):
        with pytest.raises(ValueError):
            JWTConfig(secret_key="x" * 32, algorithm="none").validate_config()


class TestConfigClasses:

    @pytest.mark.parametrize("config_cls, prefix", [
        (RealtimeConfig, "REALTIME_"),
        (DatabaseConfig, "PG_"),
        (JWTConfig, "JWT_"),
        (EmailConfig, "EMAIL_"),
        (CorsConfig, "CORS_"),
    ])
    def test_instantiates_with_own_prefix(self, config_cls, prefix):
        config = config_cls()
        assert config_cls.model_config["env_prefix"] == prefix
        assert config_cls.model_config["env_file"] == ".env"
        assert config_cls.model_config["case_sensitive"] is False
        assert isinstance(config.to_dict(), dict)

    def test_base_dict_carries_no_prefix(self):
        assert "env_prefix" not in BASE_CONFIG_DICT

    def test_database_dsn_alias(self, monkeypatch):
        monkeypatch.setenv("POSTGRES_DSN", "postgresql://u:p@localhost/db")
        monkeypatch.delenv("PG_DSN", raising=False)
        assert DatabaseConfig().get_dsn() == "postgresql://u:p@localhost/db"

    def test_cors_origins_parsed(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", " https://app.example.com , ,http://localhost:5173")
        assert CorsConfig().origins == ["https://app.example.com", "http://localhost:5173"]
