from withkit_assets.domain.models.asset_group import AssetGroup, AssetKind, LoadContext
from withkit_assets.domain.models.block_name import (
    InvalidBlockFilename,
    ParsedBlockName,
    parse_block_filename,
    resolve_block_name,
)
from withkit_assets.domain.models.build_entry import BuildEntry, CompiledBundle
from withkit_assets.domain.models.build_mode import BuildMode
from withkit_assets.domain.models.request_context import RequestContext
from withkit_assets.domain.models.resolved_asset import (
    AssetManifest,
    AssetVersion,
    ResolvedAsset,
    Tier,
)
from withkit_assets.domain.models.results import BuildResult, ScanDelta, TransformReport

__all__ = [
    "AssetGroup",
    "AssetKind",
    "AssetManifest",
    "AssetVersion",
    "BuildEntry",
    "BuildMode",
    "BuildResult",
    "CompiledBundle",
    "InvalidBlockFilename",
    "LoadContext",
    "ParsedBlockName",
    "RequestContext",
    "ResolvedAsset",
    "ScanDelta",
    "Tier",
    "TransformReport",
    "parse_block_filename",
    "resolve_block_name",
]
