from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "media-upload-proxy"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    allowed_origins: str | None = None
    gcp_project: str = ""
    gcloud_project: str = ""

    upload_folder: str = "products"
    max_upload_bytes: int = 8 * 1024 * 1024
    require_auth: bool = False


settings = Settings()
