from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from withkit_assets.domain.models.build_mode import BuildMode

if TYPE_CHECKING:
    from withkit_assets.config.settings_models import UserSettings

DEFAULT_THEME_PREFIX = "withkit-starter"
DEFAULT_IMAGE_MAX_WIDTH = 2560
DEFAULT_WATCH_INTERVAL_SECONDS = 2


@dataclass(frozen=True)
class RuntimePaths:
    theme_root: Path
    source_dir: Path
    images_source_dir: Path
    svg_source_dir: Path
    build_dir: Path
    logs_dir: Path
    lock_path: Path
    style_css_path: Path
    package_json_path: Path
    settings_path: Path
    parent_theme_root: Path | None
    parent_source_dir: Path | None

    @property
    def source_roots(self) -> tuple[Path, ...]:
        """Source trees in base-then-override order."""
        if self.parent_source_dir is None:
            return (self.source_dir,)
        return (self.parent_source_dir, self.source_dir)


@dataclass(frozen=True)
class AppConfig:
    user: UserSettings
    paths: RuntimePaths
    mode: BuildMode = BuildMode.DEVELOPMENT

    @property
    def theme_prefix(self) -> str:
        return self.user.theme_prefix or DEFAULT_THEME_PREFIX

    @property
    def parent_theme_prefix(self) -> str:
        if self.user.parent_theme_prefix:
            return self.user.parent_theme_prefix
        return self.theme_prefix.replace("-", "_")

    @property
    def worker_count(self) -> int:
        return self.user.build_workers if self.user.build_workers is not None else 1

    @property
    def image_max_width(self) -> int:
        if self.user.image_max_width is None:
            return DEFAULT_IMAGE_MAX_WIDTH
        return self.user.image_max_width

    @property
    def watch_interval_seconds(self) -> int:
        if self.user.watch_interval_seconds is None:
            return DEFAULT_WATCH_INTERVAL_SECONDS
        return self.user.watch_interval_seconds

    @property
    def override_root(self) -> Path:
        return self.paths.theme_root

    @property
    def base_root(self) -> Path:
        return self.paths.parent_theme_root or self.paths.theme_root

    @property
    def override_uri(self) -> str:
        return str(self.user.theme_uri or "").strip().rstrip("/")

    @property
    def base_uri(self) -> str:
        parent = str(self.user.parent_theme_uri or "").strip().rstrip("/")
        return parent or self.override_uri
