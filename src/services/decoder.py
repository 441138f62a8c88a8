import base64
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.config import settings
from src.core.exceptions import ErrorCode, MediaError
from src.schemas.images import ImageUploadRequest

_DATA_URI_RE = re.compile(r"^data:(.+);base64,(.*)$", re.DOTALL)
_NON_ALPHABET_RE = re.compile(r"[^A-Za-z0-9+/=]")
_URLSAFE_TABLE = str.maketrans("-_", "+/")


def parse_upload_request(payload: Any) -> ImageUploadRequest:
    if not isinstance(payload, Mapping):
        payload = {}
    try:
        request = ImageUploadRequest.model_validate(payload)
    except ValidationError as e:
        raise MediaError(ErrorCode.INVALID_ARGUMENT, "filename and base64 are required.") from e
    if not request.filename or not request.base64:
        raise MediaError(ErrorCode.INVALID_ARGUMENT, "filename and base64 are required.")
    return request


def strip_data_uri(data: str) -> str:
    match = _DATA_URI_RE.match(data)
    if match:
        return match.group(2)
    return data


def lenient_b64decode(data: str) -> bytes:
    cleaned = _NON_ALPHABET_RE.sub("", data.translate(_URLSAFE_TABLE))
    cleaned = cleaned.partition("=")[0]
    # a lone trailing sextet cannot encode a byte
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def decode_upload(payload: Any, max_bytes: int | None = None) -> bytes:
    request = parse_upload_request(payload)
    buffer = lenient_b64decode(strip_data_uri(request.base64 or ""))

    limit = settings.max_upload_bytes if max_bytes is None else max_bytes
    if len(buffer) > limit:
        raise MediaError(
            ErrorCode.RESOURCE_EXHAUSTED,
            f"File too large. Max {limit // (1024 * 1024)} MB allowed.",
        )
    return buffer
