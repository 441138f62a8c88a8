from typing import Any

import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.routing import Match
from starlette.types import Receive, Scope, Send

from src.core.exceptions import ErrorCode, MediaError
from src.services import images, origins

logger = structlog.get_logger()


class AnyMethodRoute(APIRoute):
    """Route that hands every HTTP verb to its endpoint, which answers 405 itself."""

    def matches(self, scope: Scope) -> tuple[Match, Scope]:
        match, child_scope = super().matches(scope)
        if match is Match.PARTIAL:
            return Match.FULL, child_scope
        return match, child_scope

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)


router = APIRouter(route_class=AnyMethodRoute)


async def _read_body(request: Request) -> Any:
    content_type = request.headers.get("Content-Type", "").split(";")[0].strip().lower()
    if content_type != "application/json" and not content_type.endswith("+json"):
        return {}
    raw = await request.body()
    if not raw.strip():
        return {}
    body = await request.json()
    return body if isinstance(body, dict) else {}


def _preflight_or_reject(request: Request, headers: dict[str, str]) -> Response | None:
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=headers)
    if request.method != "POST":
        return JSONResponse(status_code=405, content={"error": "Method Not Allowed"}, headers=headers)
    return None


def _server_error(name: str, error: Exception, headers: dict[str, str]) -> JSONResponse:
    logger.error("http_function_outer_error", function=name, error=str(error))
    return JSONResponse(status_code=500, content={"error": str(error) or "Server error"}, headers=headers)


@router.api_route("/uploadimage", methods=["POST", "OPTIONS"])
async def upload_image_http(request: Request) -> Response:
    headers: dict[str, str] = {}
    try:
        headers = origins.cors_headers(request.headers.get("Origin"))
        early = _preflight_or_reject(request, headers)
        if early is not None:
            return early

        body = await _read_body(request)
        try:
            result = await images.upload_image(body)
        except MediaError as e:
            logger.error("uploadimage_failed", code=e.code.value, error=e.message)
            if e.code is ErrorCode.INTERNAL:
                return JSONResponse(status_code=500, content={"error": e.message}, headers=headers)
            return JSONResponse(
                status_code=400,
                content={"error": e.message, "code": e.code.value},
                headers=headers,
            )
        except Exception as e:
            logger.error("uploadimage_failed", error=str(e))
            return JSONResponse(status_code=500, content={"error": str(e) or "Upload failed"}, headers=headers)
        return JSONResponse(content=result.model_dump(mode="json"), headers=headers)
    except Exception as e:
        return _server_error("uploadimage", e, headers)


@router.api_route("/deleteimage", methods=["POST", "OPTIONS"])
async def delete_image_http(request: Request) -> Response:
    headers: dict[str, str] = {}
    try:
        headers = origins.cors_headers(request.headers.get("Origin"))
        early = _preflight_or_reject(request, headers)
        if early is not None:
            return early

        body = await _read_body(request)
        try:
            result = await images.delete_image(body)
        except MediaError as e:
            logger.error("deleteimage_failed", code=e.code.value, error=e.message)
            status_code = 400 if e.code is ErrorCode.INVALID_ARGUMENT else 500
            return JSONResponse(status_code=status_code, content={"error": e.message}, headers=headers)
        except Exception as e:
            logger.error("deleteimage_failed", error=str(e))
            return JSONResponse(status_code=500, content={"error": str(e) or "Delete failed"}, headers=headers)
        return JSONResponse(content=result.model_dump(mode="json"), headers=headers)
    except Exception as e:
        return _server_error("deleteimage", e, headers)
