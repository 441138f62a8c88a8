from fastapi import APIRouter

from src.schemas.images import HealthResponse
from src.services.media_backend import MediaCredentials

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", media_backend_configured=MediaCredentials().is_complete)
