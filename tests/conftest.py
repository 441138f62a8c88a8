import base64
import uuid
from collections.abc import AsyncIterator, Iterator
from io import BytesIO
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch

import cloudinary.uploader
import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image, UnidentifiedImageError

from src.main import app

_FORMATS = {"JPEG": "jpg", "PNG": "png", "GIF": "gif", "WEBP": "webp"}


def make_test_image(width: int = 100, height: int = 100, fmt: str = "PNG") -> bytes:
    img = Image.new("RGB", (width, height), color="red")
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def make_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode()}"


def _fake_upload(file: Any, **options: Any) -> dict[str, Any]:
    data = file.read()
    try:
        with Image.open(BytesIO(data)) as img:
            width, height = img.size
            fmt = _FORMATS.get(img.format or "", "raw")
    except UnidentifiedImageError:
        width, height, fmt = 0, 0, "raw"
    public_id = f"{options.get('folder', '')}/{uuid.uuid4().hex}"
    return {
        "secure_url": f"https://res.cloudinary.com/demo/image/upload/v1/{public_id}.{fmt}",
        "url": f"http://res.cloudinary.com/demo/image/upload/v1/{public_id}.{fmt}",
        "public_id": public_id,
        "width": width,
        "height": height,
        "format": fmt,
        "bytes": len(data),
    }


@pytest.fixture(autouse=True)
def cloudinary_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setenv("CLOUDINARY_API_KEY", "123456789")
    monkeypatch.setenv("CLOUDINARY_API_SECRET", "s3cr3t")


@pytest.fixture
def media_api() -> Iterator[SimpleNamespace]:
    upload = MagicMock(side_effect=_fake_upload)
    destroy = MagicMock(return_value={"result": "ok"})
    with (
        patch.object(cloudinary.uploader, "upload", upload),
        patch.object(cloudinary.uploader, "destroy", destroy),
    ):
        yield SimpleNamespace(upload=upload, destroy=destroy)


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
