"""Top-level API router — aggregates all endpoint routers."""

from fastapi import APIRouter

from app.presentation.api.endpoints.health import router as health_router
from app.presentation.api.endpoints.contracts import router as contracts_router
from app.presentation.api.endpoints.files import router as files_router

router = APIRouter()
router.include_router(health_router)
router.include_router(contracts_router)
router.include_router(files_router)
