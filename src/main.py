from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from src.api.router import router
from src.config import settings
from src.core.logging import setup_logging
from src.services.media_backend import configure_media_backend

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_media_backend()
    logger.info("app_started", app_name=settings.app_name, require_auth=settings.require_auth)
    yield
    logger.info("app_stopped", app_name=settings.app_name)


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_logs=not settings.debug)
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("src.main:app", host=settings.host, port=settings.port, log_level=settings.log_level)
