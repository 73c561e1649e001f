"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MIN_BCRYPT_ROUNDS = 12


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./signatures.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    access_secret: str = Field(default="change-me-access", min_length=8)
    refresh_secret: str = Field(default="change-me-refresh", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    refresh_cookie_name: str = "refreshToken"
    cookie_secure: bool = False


class RateLimitSettings(BaseModel):
    backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    login_max_attempts: int = 5
    login_window_seconds: int = 15 * 60
    register_max_attempts: int = 3
    register_window_seconds: int = 15 * 60


class StorageSettings(BaseModel):
    asset_dir: Path = Field(default=Path("uploads/assets"))
    public_prefix: str = "/uploads/assets"
    max_upload_bytes: int = 10 * 1024 * 1024
    max_files_per_request: int = 5


class RendererSettings(BaseModel):
    escape_html: bool = False
    default_preset: str = "modern"


class LoggingSettings(BaseModel):
    level: str = "INFO"


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Signature Studio"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    rate_limit: RateLimitSettings = RateLimitSettings()
    storage: StorageSettings = StorageSettings()
    renderer: RendererSettings = RendererSettings()
    logging: LoggingSettings = LoggingSettings()

    @model_validator(mode="after")
    def secrets_must_differ(self) -> "Settings":
        if self.security.access_secret == self.security.refresh_secret:
            raise ValueError("security.access_secret and security.refresh_secret must differ")
        return self

    @model_validator(mode="after")
    def bcrypt_cost_floor(self) -> "Settings":
        # low costs keep the test suite fast; everywhere else 12 is the minimum
        if self.environment != "test" and self.security.bcrypt_rounds < MIN_BCRYPT_ROUNDS:
            raise ValueError(f"security.bcrypt_rounds must be at least {MIN_BCRYPT_ROUNDS} outside tests")
        return self

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def refresh_token_expire_days(self) -> int:
        return self.security.refresh_token_expire_days

    @property
    def asset_storage_dir(self) -> str:
        return str(self.storage.asset_dir)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
