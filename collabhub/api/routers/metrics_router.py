# collabhub/api/routers/metrics_router.py
"""
Prometheus metrics endpoint for the realtime core
"""

import logging

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

# Registers the collectors with the default registry
import collabhub.infra.metrics.realtime_metrics  # noqa: F401

log = logging.getLogger("collabhub.metrics")

router = APIRouter(tags=["Monitoring"])


@router.get("/metrics")
async def prometheus_metrics():
    """
    Prometheus metrics endpoint

    Exposes chat, notification, side-effect and WebSocket metrics in
    Prometheus text format.

    Usage:
        curl http://localhost:5001/metrics
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
