# collabhub/core/health.py
# =============================================================================
# File: collabhub/core/health.py
# Description: Health check endpoints for the application
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Dict, Any
from collabhub.core.fastapi_types import FastAPI

from collabhub.core import __version__
from collabhub.core.app_state import get_start_time
from collabhub.infra.persistence import pg_client

logger = logging.getLogger("collabhub.health")


def register_health_endpoints(app: FastAPI) -> None:
    """Register health check endpoints directly on the app"""

    @app.get("/health", tags=["System"])
    async def health_check() -> Dict[str, Any]:
        """Liveness plus database, connection and side-effect status"""
        return await get_health_status(app)

    @app.get("/", tags=["System"])
    async def root() -> Dict[str, Any]:
        return {
            "name": "CollabHub Realtime",
            "version": __version__,
            "websocket": "/ws",
            "docs": "/docs",
        }


async def get_health_status(app: FastAPI) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    health_data: Dict[str, Any] = {
        "status": "healthy",
        "version": __version__,
        "timestamp": now.isoformat(),
        "uptime_seconds": round((now - get_start_time()).total_seconds(), 1),
    }

    database = await pg_client.health_check()
    health_data["database"] = database
    if not database.get("healthy"):
        health_data["status"] = "degraded"

    rooms = getattr(app.state, 'rooms', None)
    health_data["realtime"] = await rooms.get_stats() if rooms else {"status": "not initialized"}

    side_effects = getattr(app.state, 'side_effects', None)
    if side_effects is not None:
        health_data["side_effects"] = side_effects.stats()

    command_bus = getattr(app.state, 'command_bus', None)
    if command_bus is not None:
        health_data["cqrs"] = {"handlers_registered": command_bus.get_handler_info().get('total_handlers', 0)}

    return health_data
