from fastapi import APIRouter

from src.api.endpoints import callables, health, http_functions

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(callables.router, tags=["callables"])
router.include_router(http_functions.router, tags=["http"])
