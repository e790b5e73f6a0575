"""
DocSentinel Configuration
Pydantic Settings for environment-based configuration.
Single source of truth for all app settings.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Use .env file for local development, env vars for production.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # App Identity
    # ==========================================================================
    app_name: str = "DocSentinel"
    app_version: str = "1.0.0"
    app_description: str = """
## DocSentinel - Legal Document Risk & Authenticity Analysis

Upload the OCR text of a scanned legal document (and the scan itself) to get:

- ⚖️ **Legal risk** - document type, dangerous clauses, warnings, 0-10 risk score
- 🔐 **Authenticity** - SHA-256 fingerprint, QR verification, security markers, 0-100 trust score
"""
    debug: bool = False
    enable_docs: bool = True  # Enable OpenAPI docs (set False in sensitive deployments)

    # ==========================================================================
    # Server
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 8000

    # ==========================================================================
    # Uploads
    # ==========================================================================
    max_upload_size_mb: int = 10
    allowed_extensions: str = "pdf,png,jpg,jpeg"

    # ==========================================================================
    # Analysis
    # ==========================================================================
    analysis_workers: int = 3  # Threads for the security fan-out
    analysis_timeout_seconds: float = 30.0  # How long the API waits on a pipeline

    @field_validator("analysis_workers")
    @classmethod
    def at_least_one_worker(cls, v: int) -> int:
        if v < 1:
            raise ValueError("analysis_workers must be >= 1")
        return v

    # ==========================================================================
    # Observability
    # ==========================================================================
    log_level: str = "INFO"
    log_json_format: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case, reject names the logging module doesn't know."""
        level = str(v).strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    # ==========================================================================
    # Deployment
    # ==========================================================================
    cors_origins: str = ""  # Comma-separated list of allowed origins. Leave empty for secure defaults.

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS origins into a list with secure defaults.
        - If explicit origins set: use those
        - If empty: restrict to localhost only
        """
        if self.cors_origins:
            if self.cors_origins == "*":
                return ["*"]
            return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

        return [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    @property
    def allowed_extensions_set(self) -> set[str]:
        """Parse allowed extensions into a set."""
        return {ext.strip().lower().lstrip(".") for ext in self.allowed_extensions.split(",") if ext.strip()}

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use dependency injection: Depends(get_settings)
    """
    return Settings()
