from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.config import settings
from src.core.exceptions import ErrorCode, MediaError
from src.schemas.images import ImageDeleteRequest, ImageDeleteResponse, ImageUploadResponse
from src.services import media_backend
from src.services.decoder import decode_upload


def _require_public_id(payload: Any) -> str:
    if not isinstance(payload, Mapping):
        payload = {}
    try:
        request = ImageDeleteRequest.model_validate(payload)
    except ValidationError as e:
        raise MediaError(ErrorCode.INVALID_ARGUMENT, "public_id required") from e
    if not request.public_id:
        raise MediaError(ErrorCode.INVALID_ARGUMENT, "public_id required")
    return request.public_id


async def upload_image(payload: Any) -> ImageUploadResponse:
    buffer = decode_upload(payload)
    credentials = media_backend.configure_media_backend()
    return await media_backend.upload_buffer(buffer, credentials, folder=settings.upload_folder)


async def delete_image(payload: Any) -> ImageDeleteResponse:
    public_id = _require_public_id(payload)
    credentials = media_backend.configure_media_backend()
    result = await media_backend.destroy_image(public_id, credentials)
    return ImageDeleteResponse(result=result)
