from src.config import settings

DEFAULT_LOCAL_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]

STATIC_CORS_HEADERS = {
    "Access-Control-Allow-Methods": "POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600",
}


def get_allowed_origins() -> list[str]:
    configured = settings.allowed_origins
    if configured and configured.strip():
        return [origin.strip() for origin in configured.split(",")]

    origins = list(DEFAULT_LOCAL_ORIGINS)
    project = settings.gcp_project or settings.gcloud_project
    if project:
        origins += [f"https://{project}.web.app", f"https://{project}.firebaseapp.com"]
    return origins


def is_allowed(origin: str | None) -> bool:
    return bool(origin) and origin in get_allowed_origins()


def cors_headers(origin: str | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    if origin and is_allowed(origin):
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
        headers["Access-Control-Allow-Credentials"] = "true"
    headers.update(STATIC_CORS_HEADERS)
    return headers
