# =============================================================================
# File: collabhub/config/pg_client_config.py
# Description: Database configuration for the PostgreSQL pool
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import SettingsConfigDict

from collabhub.common.base.base_config import BaseConfig, BASE_CONFIG_DICT


DEFAULT_SCHEMA_FILE = Path(__file__).resolve().parent.parent / "database" / "collabhub.sql"


class DatabaseConfig(BaseConfig):
    """PostgreSQL configuration (PG_ prefix, POSTGRES_DSN accepted for the DSN)"""

    model_config = SettingsConfigDict(
        **BASE_CONFIG_DICT,
        env_prefix='PG_',
    )

    dsn: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("PG_DSN", "POSTGRES_DSN"),
        description="Main database DSN"
    )

    # Pool configuration
    pool_min_size: int = Field(default=5, ge=1, description="Pool min size")
    pool_max_size: int = Field(default=20, ge=1, description="Pool max size")
    pool_timeout: float = Field(default=5.0, description="Pool acquisition timeout in seconds")
    command_timeout: float = Field(default=10.0, description="Default command timeout")
    statement_cache_size: int = Field(default=100)
    max_inactive_connection_lifetime: float = Field(default=300.0)

    # Schema
    run_schema_on_startup: bool = Field(default=True)
    schema_file: str = Field(default=str(DEFAULT_SCHEMA_FILE))

    # Monitoring
    slow_query_threshold_ms: float = Field(default=1000.0)
    long_transaction_threshold_ms: float = Field(default=2000.0)

    def to_asyncpg_params(self) -> Dict[str, Any]:
        """Convert to asyncpg pool parameters"""
        return {
            'min_size': self.pool_min_size,
            'max_size': self.pool_max_size,
            'timeout': self.pool_timeout,
            'command_timeout': self.command_timeout,
            'statement_cache_size': self.statement_cache_size,
            'max_inactive_connection_lifetime': self.max_inactive_connection_lifetime,
        }

    def get_dsn(self) -> Optional[str]:
        return self.dsn.get_secret_value() if self.dsn else None


@lru_cache(maxsize=1)
def get_database_config() -> DatabaseConfig:
    """Get database configuration singleton (cached)."""
    return DatabaseConfig()


def reset_database_config() -> None:
    """Reset config singleton (for testing)."""
    get_database_config.cache_clear()
