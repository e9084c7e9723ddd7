"""Health check endpoint — no dependencies, always available."""

import time

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe; requires no identity."""
    return {
        "status": "ok",
        "timestamp": int(time.time() * 1000),
    }
