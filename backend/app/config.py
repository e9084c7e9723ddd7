import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Transport Contract API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    port: int = 3000

    # Record store — sqlite:/// or postgresql:// (converted to async drivers)
    database_url: str = "sqlite:///data/contracts.db"

    # Identity
    mock_open_id: str = Field("", validation_alias="MOCK_OPENID")
    admin_identities: list[str] = []

    # CORS
    cors_origins: list[str] = ["*"]

    # Document storage
    storage_dir: str = "storage"
    public_base_url: str = "http://localhost:3000"
    url_signing_secret: str = "change-me"
    temporary_url_ttl_seconds: int = 7200

    # Rendering
    pdf_font_name: str = "STSong-Light"
    fail_on_document_error: bool = True

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_pipeline: str = "INFO"         # ContractDocumentPipeline

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    def model_post_init(self, __context: object) -> None:
        if self.url_signing_secret == "change-me" and self.app_env != "development":
            _config_logger.warning(
                "URL_SIGNING_SECRET is not configured; temporary URLs use the default secret"
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
