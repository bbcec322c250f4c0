from __future__ import annotations

from enum import StrEnum


class BuildMode(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def from_node_env(cls, value: str | None) -> "BuildMode":
        normalized = str(value or "").strip().lower()
        if normalized == cls.PRODUCTION.value:
            return cls.PRODUCTION
        return cls.DEVELOPMENT
