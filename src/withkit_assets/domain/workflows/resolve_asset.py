from __future__ import annotations

from typing import final

from withkit_assets.application.repositories.manifest_contract import (
    manifest_name_for,
    parse_manifest,
)
from withkit_assets.domain.models.resolved_asset import (
    AssetManifest,
    AssetVersion,
    ResolvedAsset,
)
from withkit_assets.domain.protocols.overridable_store_protocol import OverridableStoreProtocol


def normalize_key(relative_path: str) -> str:
    return relative_path.replace("\\", "/").lstrip("/")


@final
class ManifestResolver:
    """Pick the override or base file for an asset and read its sidecar manifest.

    Every call re-stats the store; nothing is cached between calls.
    """

    def __init__(self, store: OverridableStoreProtocol) -> None:
        self._store = store

    def _load_manifest(self, asset_key: str) -> AssetManifest | None:
        located = self._store.resolve(manifest_name_for(asset_key))
        if located is None:
            return None
        _, manifest_path = located
        try:
            raw = self._store.read_text(manifest_path)
        except (OSError, UnicodeDecodeError):
            return None
        return parse_manifest(raw)

    def resolve(self, relative_path: str) -> ResolvedAsset:
        key = normalize_key(relative_path)
        located = self._store.resolve(key)

        modified_at: int | None = None
        if located is not None:
            try:
                modified_at = self._store.modified_at(located[1])
            except OSError:
                modified_at = None

        manifest = self._load_manifest(key)
        if manifest is not None:
            dependencies = manifest.dependencies
            version: AssetVersion = manifest.version
        else:
            dependencies = tuple()
            version = modified_at if modified_at is not None else False

        return ResolvedAsset(
            relative_path=key,
            path=located[1] if located is not None else None,
            tier=located[0] if located is not None else None,
            dependencies=dependencies,
            version=version,
            modified_at=modified_at,
        )

    def uri_for(self, relative_path: str) -> str:
        return self._store.uri_for(normalize_key(relative_path))
