"""AssetAdmin configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VIEW_TYPES = ("Anyone", "LoggedInUsers", "OnlyTheseUsers", "Inherit")


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "AssetAdmin"
    debug: bool = True
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Auth — bearer tokens are decoded locally with the shared secret
    secret_key: str = "change-me-in-prod"
    token_algorithm: str = "HS256"

    # Record store (relative resolved from backend/ at runtime)
    database_path: str = "./data/assetadmin.db"
    max_db_connections: int = 5
    uvicorn_workers: int = 1

    # View rule for the root folder and for top-level records set to "Inherit"
    root_can_view_type: str = "Anyone"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="ASSET_ADMIN_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:5173"]

    @field_validator("root_can_view_type")
    @classmethod
    def check_root_can_view_type(cls, value: str) -> str:
        # The root has no parent to inherit from
        if value not in VIEW_TYPES or value == "Inherit":
            raise ValueError(f"root_can_view_type must be one of {VIEW_TYPES[:3]}")
        return value

    @model_validator(mode="after")
    def _resolve_paths(self) -> "Settings":
        """Ensure the database path is absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        if not Path(self.database_path).is_absolute():
            self.database_path = str(base / self.database_path)
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
