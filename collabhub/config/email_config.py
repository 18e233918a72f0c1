# =============================================================================
# File: collabhub/config/email_config.py
# Description: SMTP settings for mention emails
# =============================================================================

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from collabhub.common.base.base_config import BaseConfig, BASE_CONFIG_DICT


class EmailConfig(BaseConfig):
    """SMTP configuration (EMAIL_ prefix). Sending is skipped when host is empty."""

    model_config = SettingsConfigDict(
        **BASE_CONFIG_DICT,
        env_prefix='EMAIL_',
    )

    enabled: bool = Field(default=True, description="Master switch for outbound email")
    smtp_host: str = Field(default="", description="SMTP server host")
    smtp_port: int = Field(default=587, ge=1, le=65535)
    smtp_user: Optional[str] = Field(default=None)
    smtp_password: SecretStr = Field(default=SecretStr(""))
    use_tls: bool = Field(default=True, description="Issue STARTTLS after connecting")
    from_address: str = Field(default="no-reply@collabhub.local")
    timeout_seconds: float = Field(default=15.0, gt=0)

    @property
    def is_configured(self) -> bool:
        return bool(self.enabled and self.smtp_host and self.from_address)


@lru_cache(maxsize=1)
def get_email_config() -> EmailConfig:
    """Get email configuration singleton (cached)."""
    return EmailConfig()


def reset_email_config() -> None:
    """Reset config singleton (for testing)."""
    get_email_config.cache_clear()
