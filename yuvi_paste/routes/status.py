"""Liveness endpoint."""

import time

from fastapi import APIRouter

from yuvi_paste.config import settings
from yuvi_paste.utils.clock import utc_now_iso

_started_at = time.monotonic()

router = APIRouter(tags=["Health"])


@router.get("/status")
async def get_status() -> dict:
    """
    Report that the process is serving requests.

    Unauthenticated and does not touch DynamoDB, so it stays cheap
    enough for load balancer probes.
    """
    return {
        "status": "ok",
        "service": settings.api_title,
        "version": settings.api_version,
        "uptime_seconds": int(time.monotonic() - _started_at),
        "timestamp": utc_now_iso(),
    }
