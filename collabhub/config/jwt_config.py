# =============================================================================
# File: collabhub/config/jwt_config.py - JWT Configuration
# =============================================================================

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from collabhub.common.base.base_config import BaseConfig, BASE_CONFIG_DICT
from collabhub.config.logging_config import get_logger

log = get_logger("collabhub.config.jwt")

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512", "RS256", "RS384", "RS512")


class JWTConfig(BaseConfig):
    """
    JWT verification settings. Tokens are issued by the auth service;
    this process only verifies them.
    """

    model_config = SettingsConfigDict(
        **BASE_CONFIG_DICT,
        env_prefix='JWT_',
    )

    secret_key: SecretStr = Field(
        default=SecretStr(""),
        description="JWT secret key (required, min 32 chars)"
    )

    algorithm: str = Field(default="HS256", description="Signing algorithm")

    audience: str = Field(default="", description="Expected audience claim, empty to skip the check")

    def validate_config(self) -> None:
        """Validate JWT configuration"""
        secret = self.secret_key.get_secret_value()
        if not secret:
            raise RuntimeError("JWT secret_key is required")

        if len(secret) < 32:
            log.warning("JWT secret_key should be at least 32 characters long for security")

        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported algorithm: {self.algorithm}")

    def get_secret_key(self) -> str:
        """Get secret key as plain string"""
        return self.secret_key.get_secret_value()


@lru_cache(maxsize=1)
def get_jwt_config() -> JWTConfig:
    """Get JWT configuration singleton (cached)."""
    config = JWTConfig()
    config.validate_config()
    return config


def reset_jwt_config() -> None:
    """Reset config singleton (for testing)."""
    get_jwt_config.cache_clear()
