import asyncio
from typing import Any

import firebase_admin
import structlog
from firebase_admin import auth as firebase_auth

from src.config import settings
from src.core.exceptions import ErrorCode, MediaError

logger = structlog.get_logger()


def get_firebase_app() -> firebase_admin.App:
    try:
        return firebase_admin.get_app()
    except ValueError:
        project = settings.gcp_project or settings.gcloud_project
        return firebase_admin.initialize_app(options={"projectId": project} if project else None)


def bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def _verify(token: str) -> dict[str, Any]:
    return firebase_auth.verify_id_token(token, app=get_firebase_app())


async def verify_id_token(token: str | None) -> dict[str, Any]:
    if not token:
        raise MediaError(ErrorCode.UNAUTHENTICATED, "Authentication required.")
    try:
        claims = await asyncio.to_thread(_verify, token)
    except (firebase_auth.InvalidIdTokenError, ValueError) as e:
        logger.warning("id_token_rejected", error=str(e))
        raise MediaError(ErrorCode.UNAUTHENTICATED, "Authentication required.") from e
    if not claims.get("uid"):
        raise MediaError(ErrorCode.UNAUTHENTICATED, "Authentication required.")
    return claims
