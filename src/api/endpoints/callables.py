from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.config import settings
from src.core.exceptions import ErrorCode, MediaError
from src.services import auth, images
from src.services.media_backend import CREDENTIAL_ENV_VARS

logger = structlog.get_logger()

router = APIRouter()

# injected by the hosting environment
REQUIRED_SECRETS = CREDENTIAL_ENV_VARS

Operation = Callable[[Any], Awaitable[BaseModel]]


def _error_response(error: MediaError) -> JSONResponse:
    return JSONResponse(
        status_code=error.code.http_status,
        content={"error": {"status": error.code.wire_status, "message": error.message}},
    )


async def _read_data(request: Request) -> Any:
    try:
        body = await request.json()
    except ValueError as e:
        raise MediaError(ErrorCode.INVALID_ARGUMENT, "Bad Request") from e
    if not isinstance(body, dict) or "data" not in body:
        raise MediaError(ErrorCode.INVALID_ARGUMENT, "Bad Request")
    return body["data"]


async def _check_auth(request: Request) -> None:
    if not settings.require_auth:
        return
    claims = await auth.verify_id_token(auth.bearer_token(request.headers.get("Authorization")))
    logger.info("callable_authenticated", uid=claims["uid"])


async def _call(request: Request, operation: Operation, name: str, fallback: str) -> JSONResponse:
    try:
        await _check_auth(request)
        data = await _read_data(request)
        result = await operation(data)
    except MediaError as e:
        logger.error("callable_failed", operation=name, code=e.code.value, error=e.message)
        return _error_response(e)
    except Exception as e:
        logger.error("callable_failed", operation=name, error=str(e))
        return _error_response(MediaError(ErrorCode.INTERNAL, str(e) or fallback))
    return JSONResponse(content={"result": result.model_dump(mode="json")})


@router.post("/uploadImageCallable")
async def upload_image_callable(request: Request) -> JSONResponse:
    return await _call(request, images.upload_image, "uploadImage", "Upload failed")


@router.post("/deleteImageCallable")
async def delete_image_callable(request: Request) -> JSONResponse:
    return await _call(request, images.delete_image, "deleteImage", "Delete failed")
