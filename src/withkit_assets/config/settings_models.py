from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class UserSettings(BaseModel):
    theme_prefix: str | None = Field(default=None)
    parent_theme_prefix: str | None = Field(default=None)
    parent_theme_dir: str | None = Field(default=None)
    theme_uri: str | None = Field(default=None)
    parent_theme_uri: str | None = Field(default=None)
    log_level: str | None = Field(default=None)
    node_env: str | None = Field(default=None)
    build_workers: int | None = Field(default=None, ge=1)
    image_max_width: int | None = Field(default=None, ge=1)
    watch_interval_seconds: int | None = Field(default=None, ge=1)
    browsersync_proxy: str | None = Field(default=None)
    theme_version: str | None = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = str(value or "").strip().lower()
        if not normalized:
            return None
        if normalized not in {"debug", "info", "warn", "warning", "error"}:
            raise ValueError("LOG_LEVEL must be one of: debug, info, warn, error")
        return "warning" if normalized == "warn" else normalized

    @field_validator("theme_prefix", "parent_theme_prefix")
    @classmethod
    def _validate_prefix(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        if not normalized:
            return None
        if "/" in normalized or " " in normalized:
            raise ValueError("Theme prefixes must not contain '/' or spaces")
        return normalized
