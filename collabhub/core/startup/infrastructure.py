# =============================================================================
# File: collabhub/core/startup/infrastructure.py
# Description: Database pool and schema initialization
# =============================================================================

import logging
from collabhub.core.fastapi_types import FastAPI

from collabhub.config.pg_client_config import get_database_config
from collabhub.infra.persistence.pg_client import init_db_pool, run_schema_from_file

logger = logging.getLogger("collabhub.startup.infrastructure")


async def initialize_databases(app: FastAPI) -> None:
    """Open the PostgreSQL pool. Startup fails when the database is unreachable."""
    await init_db_pool()
    logger.info("PostgreSQL pool initialized")


async def run_database_schemas() -> None:
    """Apply collabhub.sql once per process start."""
    config = get_database_config()
    if not config.run_schema_on_startup:
        logger.info("Schema execution disabled (PG_RUN_SCHEMA_ON_STARTUP=false)")
        return

    await run_schema_from_file(config.schema_file)
