# =============================================================================
# File: collabhub/core/middleware.py
# Description: HTTP middleware for the chat API
# =============================================================================

import logging

from fastapi.middleware.cors import CORSMiddleware

from collabhub.config.cors_config import get_cors_config
from collabhub.core.fastapi_types import FastAPI

logger = logging.getLogger("collabhub.middleware")


def setup_middleware(app: FastAPI) -> None:
    setup_cors(app)


def setup_cors(app: FastAPI) -> None:
    """
    Allow the web client to call the history, reaction and notification
    routes. The /ws handshake is not subject to CORS.
    """
    config = get_cors_config()
    origins = config.origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=config.allow_credentials and "*" not in origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
        max_age=config.max_age,
    )

    logger.info(f"CORS origins: {', '.join(origins) or '(none)'}")
