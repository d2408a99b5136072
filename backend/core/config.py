from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=BACKEND_DIR / ".env", env_file_encoding="utf-8")

    database_url: str = Field(validation_alias=AliasChoices("database_url", "DATABASE_URL", "SUPABASE_DB_URL"))

    # Runtime
    environment: str = Field(default="development", validation_alias=AliasChoices("environment", "ENVIRONMENT"))
    frontend_origin: str = Field(
        default="http://localhost:5173",
        validation_alias=AliasChoices("frontend_origin", "FRONTEND_ORIGIN"),
    )

    # Create the timetable_entries table on startup (handy for local SQLite runs).
    auto_create_schema: bool = Field(
        default=False,
        validation_alias=AliasChoices("auto_create_schema", "AUTO_CREATE_SCHEMA"),
    )

    # Rotating log file location (production only).
    log_dir: Path = Field(
        default=BACKEND_DIR / "logs",
        validation_alias=AliasChoices("log_dir", "LOG_DIR"),
    )

    # Printable document / export
    document_title: str = Field(
        default="Class Timetable",
        validation_alias=AliasChoices("document_title", "DOCUMENT_TITLE"),
    )
    export_dir: Path = Field(
        default=BACKEND_DIR / "exports",
        validation_alias=AliasChoices("export_dir", "EXPORT_DIR"),
    )

    @field_validator("frontend_origin")
    @classmethod
    def _normalize_frontend_origin(cls, v: str) -> str:
        # Starlette CORS expects the Origin to match exactly (no trailing slash).
        return v.strip().rstrip("/")

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, v: str) -> str:
        return (v or "development").strip().lower()

    @field_validator("document_title")
    @classmethod
    def _normalize_document_title(cls, v: str) -> str:
        return (v or "").strip() or "Class Timetable"


settings = Settings()
