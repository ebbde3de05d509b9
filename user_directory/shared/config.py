# user_directory/shared/config.py
from enum import Enum
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic; every field can be overridden
    by an environment variable of the same name.
    """

    # --- Application Meta ---
    APP_NAME: str = "user-directory"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT
    DEBUG: bool = False

    # --- HTTP API ---
    API_PREFIX: str = "/api/v1"
    DOCS_ENABLED: bool = True
    CORS_ORIGINS: str = "*"

    # --- Persistence ---
    DATABASE_URL: str = "sqlite:///./user_directory.db"
    DATABASE_ECHO: bool = False
    # Attempts for idempotent reads when the store is briefly unavailable
    STORAGE_READ_RETRIES: int = 3

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    OTEL_SERVICE_NAME: str = "user-directory"
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    # --- Transports ---
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 3000
    ENABLE_WEBSOCKET: bool = False
    WEBSOCKET_PORT: int = 3001
    ENABLE_GRPC: bool = False
    GRPC_PORT: int = 50051

    @property
    def cors_origins(self) -> List[str]:
        """Comma-separated CORS_ORIGINS as a list; '*' allows every origin."""
        raw = (self.CORS_ORIGINS or "").strip()
        if not raw or raw == "*":
            return ["*"]
        return [p.strip() for p in raw.split(",") if p.strip()]

    @property
    def api_root(self) -> str:
        """API_PREFIX normalized to '' or '/segment' without a trailing slash."""
        prefix = (self.API_PREFIX or "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        return prefix

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process settings, reading the environment on first use.

    Tests and embedding code should build their own ``Settings`` and pass it
    to ``create_app`` instead of relying on this cache.
    """
    return Settings()
