from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import ClassVar, final

from withkit_assets.config.settings_models import UserSettings
from withkit_assets.domain.models.app_config import AppConfig, RuntimePaths
from withkit_assets.domain.models.build_mode import BuildMode


@final
class SettingsLoader:
    _KEY_MAP: ClassVar[dict[str, str]] = {
        "THEME_PREFIX": "theme_prefix",
        "PARENT_THEME_PREFIX": "parent_theme_prefix",
        "PARENT_THEME_DIR": "parent_theme_dir",
        "THEME_URI": "theme_uri",
        "PARENT_THEME_URI": "parent_theme_uri",
        "LOG_LEVEL": "log_level",
        "NODE_ENV": "node_env",
        "BUILD_WORKERS": "build_workers",
        "IMAGE_MAX_WIDTH": "image_max_width",
        "WATCH_INTERVAL_SECONDS": "watch_interval_seconds",
        "BROWSERSYNC_PROXY": "browsersync_proxy",
        "THEME_VERSION": "theme_version",
    }
    _INT_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"build_workers", "image_max_width", "watch_interval_seconds"}
    )
    # Environment wins over the settings file for these keys.
    _ENV_OVERRIDES: ClassVar[tuple[str, ...]] = ("NODE_ENV", "BROWSERSYNC_PROXY")

    @staticmethod
    def _parse_key_value_file(path: Path) -> dict[str, str]:
        data: dict[str, str] = {}
        if not path.exists():
            return data

        for raw_line in path.read_text("utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[7:].strip()
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            data[key.strip()] = value.strip().strip('"').strip("'")
        return data

    @classmethod
    def _apply_environment(
        cls, raw: dict[str, str], environ: Mapping[str, str]
    ) -> dict[str, str]:
        merged = dict(raw)
        for key in cls._ENV_OVERRIDES:
            value = environ.get(key)
            if value is not None and value.strip():
                merged[key] = value.strip()
        return merged

    @classmethod
    def _to_user_settings(cls, raw: dict[str, str]) -> UserSettings:
        mapped: dict[str, object] = {}
        for key, value in raw.items():
            target = cls._KEY_MAP.get(key)
            if not target:
                continue
            text = str(value or "").strip()
            if not text:
                mapped[target] = None
                continue
            if target in cls._INT_FIELDS:
                try:
                    mapped[target] = int(text)
                except ValueError:
                    mapped[target] = None
                continue
            mapped[target] = text

        return UserSettings.model_validate(mapped)

    @staticmethod
    def _build_paths(
        theme_root: Path, settings_path: Path, parent_theme_dir: str | None
    ) -> RuntimePaths:
        parent_root: Path | None = None
        if parent_theme_dir:
            candidate = Path(parent_theme_dir)
            parent_root = candidate if candidate.is_absolute() else theme_root / candidate
        source_dir = theme_root / "src"
        build_dir = theme_root / "build"
        return RuntimePaths(
            theme_root=theme_root,
            source_dir=source_dir,
            images_source_dir=source_dir / "images",
            svg_source_dir=source_dir / "svg",
            build_dir=build_dir,
            logs_dir=build_dir / "logs",
            lock_path=build_dir / ".build.lock",
            style_css_path=theme_root / "style.css",
            package_json_path=theme_root / "package.json",
            settings_path=settings_path,
            parent_theme_root=parent_root,
            parent_source_dir=(parent_root / "src") if parent_root is not None else None,
        )

    @classmethod
    def load(
        cls,
        settings_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AppConfig:
        theme_root = Path.cwd()
        resolved_settings = settings_path or theme_root / "configs" / "settings.ini"
        raw = cls._parse_key_value_file(resolved_settings)
        raw = cls._apply_environment(raw, os.environ if environ is None else environ)
        user = cls._to_user_settings(raw)
        paths = cls._build_paths(theme_root, resolved_settings, user.parent_theme_dir)
        return AppConfig(user=user, paths=paths, mode=BuildMode.from_node_env(user.node_env))
