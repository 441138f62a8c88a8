from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImageUploadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    filename: str | None = None
    base64: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")


class ImageUploadResponse(BaseModel):
    url: str
    public_id: str
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    format: str


class ImageDeleteRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    public_id: str | None = None


class ImageDeleteResponse(BaseModel):
    result: Any


class HealthResponse(BaseModel):
    status: str
    media_backend_configured: bool
