"""Application configuration."""

from typing import Literal

from limits import parse
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from the environment and the .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    frontend_url: str = "http://localhost:5173"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/selfvault.db"
    database_echo: bool = False

    # Authentication: "module:Factory" returning an IdentityProvider
    identity_provider: str = ""

    # Blob storage
    storage_provider: Literal["local", "s3"] = "local"
    local_storage_path: str = "./data/uploads"
    public_api_url: str = "http://localhost:8080/api/v1"
    signing_secret: str = Field(default="change-me", min_length=1)
    s3_endpoint: str = "localhost:9000"
    s3_access_key: str = "minioadmin"
    s3_secret_key: str = "minioadmin"
    s3_bucket: str = "selfvault"
    s3_region: str = "us-east-1"
    s3_secure: bool = False

    # Upload and quota policy, all in bytes
    max_upload_size_bytes: int = Field(default=100 * 1024 * 1024, gt=0)
    default_storage_limit_bytes: int = Field(default=5 * 1024 * 1024 * 1024, gt=0)
    forbidden_mime_types: str = (
        "application/x-msdownload,application/x-executable,application/x-dosexec,application/x-sh"
    )

    # Rate limits, in the "<count>/<period>" notation of the limits library
    rate_limit_enabled: bool = True
    rate_limit_global: str = "100/15 minutes"
    rate_limit_upload: str = "50/hour"
    rate_limit_share_access: str = "10/15 minutes"

    # Shares
    signed_url_ttl_seconds: int = Field(default=3600, gt=0)
    max_signed_url_ttl_seconds: int = Field(default=7 * 24 * 3600, gt=0)

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def forbidden_mime_type_set(self) -> set[str]:
        """Upload MIME types that are always refused, lowercased."""
        return {t.strip().lower() for t in self.forbidden_mime_types.split(",") if t.strip()}

    @field_validator("rate_limit_global", "rate_limit_upload", "rate_limit_share_access")
    @classmethod
    def _check_rate_limit(cls, value: str) -> str:
        parse(value)
        return value

    def build_share_url(self, token: str) -> str:
        """Public frontend URL for a share token."""
        return f"{self.frontend_url.rstrip('/')}/share/{token}"


settings = Settings()
