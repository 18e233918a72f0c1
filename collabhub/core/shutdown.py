# =============================================================================
# File: collabhub/core/shutdown.py
# Description: Graceful shutdown logic for all services
# =============================================================================

import logging
from collabhub.core.fastapi_types import FastAPI

from collabhub.config.realtime_config import get_realtime_config
from collabhub.infra.persistence.pg_client import close_db_pool

logger = logging.getLogger("collabhub.shutdown")


async def shutdown_all_services(app: FastAPI) -> None:
    """Shutdown all services in the correct order"""

    if getattr(app, '_shutdown_in_progress', False):
        logger.warning("Shutdown already in progress, skipping")
        return

    app._shutdown_in_progress = True

    # Phase 1: let in-flight mention emails finish
    await shutdown_side_effects(app)

    # Phase 2: close database connections
    await close_db_pool()


async def shutdown_side_effects(app: FastAPI) -> None:
    runner = getattr(app.state, 'side_effects', None)
    if runner is None:
        return

    timeout = get_realtime_config().side_effect_drain_timeout_seconds
    stats = runner.stats()
    logger.info(f"Draining {stats['pending']} pending side effects (timeout {timeout}s)")
    await runner.shutdown(timeout=timeout)
    if runner.failures:
        logger.warning(f"{len(runner.failures)} side effects failed during this process lifetime")
