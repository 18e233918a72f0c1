# collabhub/core/lifespan.py
# =============================================================================
# File: collabhub/core/lifespan.py
# Description: Application lifespan management (startup/shutdown)
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager
from collabhub.core.fastapi_types import FastAPI

from collabhub.core import __version__
from collabhub.core.app_state import AppState
from collabhub.config.logging_config import log_section
from collabhub.core.startup.infrastructure import initialize_databases, run_database_schemas
from collabhub.core.startup.services import (
    initialize_read_repositories,
    initialize_services,
    initialize_realtime,
)
from collabhub.core.startup.cqrs import initialize_cqrs_and_handlers
from collabhub.core.shutdown import shutdown_all_services

logger = logging.getLogger("collabhub.lifespan")


# =============================================================================
# LIFESPAN (Startup/Shutdown)
# =============================================================================
@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Application lifespan manager with structured initialization"""

    logger.info(f"CollabHub {__version__} starting up...")

    app_instance.state = AppState()

    try:
        # Phase 1: Database
        logger.info("Phase 1: Initializing database pool...")
        await initialize_databases(app_instance)

        # Phase 2: Schema (once per process, never from request handlers)
        logger.info("Phase 2: Running database schema...")
        await run_database_schemas()

        # Phase 3: Read Repositories
        logger.info("Phase 3: Initializing read repositories...")
        await initialize_read_repositories(app_instance)

        # Phase 4: Core Services
        logger.info("Phase 4: Initializing core services...")
        await initialize_services(app_instance)

        # Phase 5: CQRS Handlers
        logger.info("Phase 5: Initializing CQRS...")
        await initialize_cqrs_and_handlers(app_instance)

        # Phase 6: Realtime Gateway
        logger.info("Phase 6: Initializing realtime gateway...")
        await initialize_realtime(app_instance)

        log_section(logger, f"CollabHub v{__version__} ready to serve requests")

        yield

    except Exception as startup_error:
        logger.error(f"Critical error during startup: {startup_error}", exc_info=True)
        raise

    finally:
        logger.info(f"CollabHub v{__version__} shutting down...")
        try:
            async with asyncio.timeout(30.0):
                await shutdown_all_services(app_instance)
            logger.info(f"CollabHub v{__version__} stopped gracefully")
        except TimeoutError:
            logger.error("Shutdown timed out after 30s, forcing exit")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}", exc_info=True)

# =============================================================================
# EOF
# =============================================================================
