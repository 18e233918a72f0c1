# collabhub/core/routes.py
# =============================================================================
# File: collabhub/core/routes.py
# Description: Route registration for FastAPI application
# =============================================================================

import logging
from collabhub.core.fastapi_types import FastAPI

from collabhub.api.routers.message_router import router as message_router
from collabhub.api.routers.metrics_router import router as metrics_router
from collabhub.api.routers.notification_router import router as notification_router
from collabhub.api.routers.realtime_router import router as realtime_router
from collabhub.api.routers.task_events_router import router as task_events_router

from collabhub.core.health import register_health_endpoints

logger = logging.getLogger("collabhub.routes")


def setup_routes(app: FastAPI) -> None:
    """Register all routers with the FastAPI application"""

    app.include_router(realtime_router)
    app.include_router(message_router)
    app.include_router(notification_router)
    app.include_router(task_events_router)
    app.include_router(metrics_router)

    register_health_endpoints(app)

    logger.info("Routers registered")
