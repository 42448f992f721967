#!/usr/bin/env python
"""
Centralized configuration schema.

Merges defaults from config.Config (or a Flask app's config mapping) into a
validated settings object used to wire the storage backends.
"""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Config, normalize_database_url


class AppSettings(BaseModel):
    """Validated runtime settings."""

    model_config = ConfigDict(extra="ignore")

    catalog_backend: Literal["database", "filesystem"] = "database"
    database_url: str
    database_ssl: bool = False
    data_dir: str
    cors_allowed_origins: List[str] = Field(default_factory=list)
    max_content_length: int = Field(default=5 * 1024 * 1024, ge=1)
    frontend_build_dir: Optional[str] = None

    @field_validator("catalog_backend", mode="before")
    @classmethod
    def _normalize_backend(cls, value: object) -> object:
        if isinstance(value, str):
            key = value.strip().lower()
            aliases = {"db": "database", "sql": "database", "fs": "filesystem", "files": "filesystem"}
            return aliases.get(key, key)
        return value

    @field_validator("database_url", mode="before")
    @classmethod
    def _normalize_url(cls, value: object) -> object:
        if isinstance(value, str):
            return normalize_database_url(value.strip())
        return value

    @field_validator("database_ssl", mode="before")
    @classmethod
    def _coerce_ssl(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "t", "yes", "y", "on", "require"}
        return bool(value)

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [token.strip() for token in value.split(",") if token.strip()]
        return value


def load_app_settings(source: Optional[Mapping[str, Any]] = None) -> AppSettings:
    """Build settings from a config mapping (defaults to ``Config``)."""
    if source is None:
        source = {key: getattr(Config, key) for key in dir(Config) if key.isupper()}
    data = {
        "catalog_backend": source.get("CATALOG_BACKEND", Config.CATALOG_BACKEND),
        "database_url": source.get("SQLALCHEMY_DATABASE_URI", Config.SQLALCHEMY_DATABASE_URI),
        "database_ssl": source.get("DATABASE_SSL", Config.DATABASE_SSL),
        "data_dir": source.get("DATA_DIR", Config.DATA_DIR),
        "cors_allowed_origins": source.get("CORS_ALLOWED_ORIGINS", Config.CORS_ALLOWED_ORIGINS),
        "max_content_length": source.get("MAX_CONTENT_LENGTH", Config.MAX_CONTENT_LENGTH),
        "frontend_build_dir": source.get("FRONTEND_BUILD_DIR", Config.FRONTEND_BUILD_DIR),
    }
    return AppSettings.model_validate(data)


__all__ = ["AppSettings", "load_app_settings"]
