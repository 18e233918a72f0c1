# =============================================================================
# File: collabhub/config/cors_config.py
# Description: Browser origins allowed to call the HTTP API
# =============================================================================

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from collabhub.common.base.base_config import BaseConfig, BASE_CONFIG_DICT

DEFAULT_DEV_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,http://127.0.0.1:3000"


class CorsConfig(BaseConfig):
    """CORS settings (CORS_ prefix). Origins are a comma-separated list."""

    model_config = SettingsConfigDict(
        **BASE_CONFIG_DICT,
        env_prefix='CORS_',
    )

    allowed_origins: str = Field(default=DEFAULT_DEV_ORIGINS)
    allow_credentials: bool = Field(default=True)
    max_age: int = Field(default=3600, ge=0, description="Preflight cache lifetime in seconds")

    @property
    def origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_cors_config() -> CorsConfig:
    return CorsConfig()


def reset_cors_config() -> None:
    get_cors_config.cache_clear()
