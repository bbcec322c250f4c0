from __future__ import annotations

import json
from typing import ClassVar, cast

from pydantic import BaseModel, ConfigDict, ValidationError

from withkit_assets.domain.models.resolved_asset import AssetManifest

MANIFEST_SUFFIX = ".asset.manifest"


class ManifestDocument(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    dependencies: list[str]
    version: str | int


def manifest_name_for(asset_name: str) -> str:
    """``build/css/screen.css`` -> ``build/css/screen.asset.manifest``."""
    head, sep, tail = asset_name.rpartition("/")
    stem = tail.rsplit(".", 1)[0] if "." in tail.lstrip(".") else tail
    return f"{head}{sep}{stem}{MANIFEST_SUFFIX}"


def parse_manifest(raw: str) -> AssetManifest | None:
    try:
        payload = cast(object, json.loads(raw))
        document = ManifestDocument.model_validate(payload)
    except (ValueError, TypeError, ValidationError):
        return None
    return AssetManifest(
        dependencies=tuple(document.dependencies),
        version=str(document.version),
    )


def dump_manifest(manifest: AssetManifest) -> str:
    document = ManifestDocument(
        dependencies=list(manifest.dependencies),
        version=manifest.version,
    )
    data = cast(dict[str, object], document.model_dump(mode="json"))
    return json.dumps(data, ensure_ascii=True, indent=2, sort_keys=True) + "\n"
