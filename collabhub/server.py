# =============================================================================
# File: collabhub/server.py
# Description: Main FastAPI application entry point
# =============================================================================

from __future__ import annotations

import os
import logging
from collabhub.core.fastapi_types import FastAPI

from collabhub.core import __version__
from collabhub.core.lifespan import lifespan
from collabhub.core.middleware import setup_middleware
from collabhub.core.routes import setup_routes
from collabhub.core.exceptions import setup_exception_handlers
from collabhub.config.logging_config import setup_logging

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================
setup_logging(
    service_name="collabhub",
    log_file=os.getenv("LOG_FILE") or None,
    enable_json=True if os.getenv("ENVIRONMENT") == "production" else None,
)

logger = logging.getLogger("collabhub.server")

# =============================================================================
# FASTAPI APP
# =============================================================================
app = FastAPI(
    title=f"CollabHub Realtime v{__version__}",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# =============================================================================
# SETUP COMPONENTS
# =============================================================================
setup_middleware(app)
setup_routes(app)
setup_exception_handlers(app)

__all__ = ["app", "__version__"]

# =============================================================================
# Development entry point
# =============================================================================
if __name__ == "__main__":
    import subprocess

    port = os.getenv("PORT", "5001")
    host = os.getenv("HOST", "0.0.0.0")
    reload = os.getenv("RELOAD", "true").lower() == "true"

    logger.info(f"Starting CollabHub on {host}:{port} (reload={reload})")

    cmd = [
        "granian",
        "--interface", "asgi",
        "collabhub.server:app",
        "--host", host,
        "--port", str(port),
        "--ws",
    ]

    if reload:
        cmd.extend([
            "--reload",
            "--reload-paths", "collabhub/",
        ])

    subprocess.run(cmd)
