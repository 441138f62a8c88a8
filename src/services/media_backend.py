import asyncio
from io import BytesIO
from typing import Any

import cloudinary.uploader
import structlog
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.exceptions import MediaBackendError
from src.schemas.images import ImageUploadResponse

logger = structlog.get_logger()

CREDENTIAL_ENV_VARS = ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")


class MediaCredentials(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CLOUDINARY_", env_file=".env", extra="ignore", frozen=True)

    cloud_name: str | None = None
    api_key: str | None = None
    api_secret: str | None = None

    @property
    def missing(self) -> list[str]:
        values = (self.cloud_name, self.api_key, self.api_secret)
        return [name for name, value in zip(CREDENTIAL_ENV_VARS, values) if not value]

    @property
    def is_complete(self) -> bool:
        return not self.missing

    def as_options(self) -> dict[str, str]:
        values = {"cloud_name": self.cloud_name, "api_key": self.api_key, "api_secret": self.api_secret}
        return {key: value for key, value in values.items() if value}


def configure_media_backend() -> MediaCredentials:
    credentials = MediaCredentials()
    if not credentials.is_complete:
        logger.warning("media_backend_credentials_missing", missing=credentials.missing)
    return credentials


def _normalize_upload(result: dict[str, Any]) -> ImageUploadResponse:
    return ImageUploadResponse(
        url=result["secure_url"],
        public_id=result["public_id"],
        width=result.get("width", 0),
        height=result.get("height", 0),
        format=result.get("format", ""),
    )


async def upload_buffer(
    buffer: bytes,
    credentials: MediaCredentials,
    folder: str = "products",
) -> ImageUploadResponse:
    try:
        result = await asyncio.to_thread(
            cloudinary.uploader.upload,
            BytesIO(buffer),
            folder=folder,
            resource_type="image",
            **credentials.as_options(),
        )
    except Exception as e:
        logger.error("media_upload_failed", folder=folder, size=len(buffer), error=str(e))
        raise MediaBackendError(str(e) or "Upload failed") from e

    if not result or not result.get("secure_url"):
        raise MediaBackendError("Empty Cloudinary response")

    try:
        uploaded = _normalize_upload(result)
    except (KeyError, ValidationError) as e:
        logger.error("media_upload_unusable_response", folder=folder, error=str(e))
        raise MediaBackendError("Unusable Cloudinary response") from e

    logger.info("image_uploaded", folder=folder, public_id=uploaded.public_id, size=len(buffer))
    return uploaded


async def destroy_image(public_id: str, credentials: MediaCredentials) -> Any:
    try:
        result = await asyncio.to_thread(
            cloudinary.uploader.destroy,
            public_id,
            **credentials.as_options(),
        )
    except Exception as e:
        logger.error("media_delete_failed", public_id=public_id, error=str(e))
        raise MediaBackendError(str(e) or "Delete failed") from e

    if isinstance(result, dict) and result.get("result") != "ok":
        logger.info("image_delete_not_confirmed", public_id=public_id, result=result.get("result"))
    else:
        logger.info("image_deleted", public_id=public_id)
    return result
