from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import ClassVar, final

from withkit_assets.domain.models.asset_group import (
    AssetGroup,
    AssetKind,
    LoadContext,
    default_asset_groups,
)
from withkit_assets.domain.models.block_name import InvalidBlockFilename, parse_block_filename
from withkit_assets.domain.models.editor_extensions import block_style_handle
from withkit_assets.domain.models.request_context import RequestContext
from withkit_assets.domain.models.resolved_asset import Tier
from withkit_assets.domain.protocols.enqueue_sink_protocol import EnqueueSinkProtocol
from withkit_assets.domain.protocols.hook_registry_protocol import HookRegistryProtocol
from withkit_assets.domain.protocols.overridable_store_protocol import OverridableStoreProtocol
from withkit_assets.domain.workflows.resolve_asset import ManifestResolver

HOOK_INIT = "init"
HOOK_BLOCK_ASSETS = "enqueue_block_assets"
HOOK_FRONTEND_ASSETS = "wp_enqueue_scripts"
HOOK_EDITOR_ASSETS = "enqueue_block_editor_assets"


@final
class AssetRegistrar:
    BLOCKS_DIR: ClassVar[str] = "build/css/blocks"
    BLOCK_STYLES_DIR: ClassVar[str] = "build/css/block-styles"
    _STYLESHEET_SUFFIX: ClassVar[str] = ".css"

    # Parent theme callbacks replaced by this registrar, keyed by hook.
    _PARENT_CALLBACKS: ClassVar[tuple[tuple[str, str], ...]] = (
        (HOOK_BLOCK_ASSETS, "enqueue_scripts"),
        (HOOK_FRONTEND_ASSETS, "enqueue_frontend_styles"),
        (HOOK_EDITOR_ASSETS, "enqueue_editor_styles"),
        (HOOK_INIT, "enqueue_block_styles"),
    )

    def __init__(
        self,
        store: OverridableStoreProtocol,
        sink: EnqueueSinkProtocol,
        prefix: str,
        logger: logging.Logger,
        groups: Sequence[AssetGroup] | None = None,
    ) -> None:
        self._store = store
        self._resolver = ManifestResolver(store)
        self._sink = sink
        self._prefix = prefix
        self._logger = logger
        self._groups = tuple(groups) if groups is not None else default_asset_groups(prefix)

    @property
    def callback_prefix(self) -> str:
        return self._prefix.replace("-", "_")

    def _register_group(self, group: AssetGroup) -> None:
        resolved = self._resolver.resolve(group.relative_path)
        uri = self._resolver.uri_for(group.relative_path)
        if group.kind is AssetKind.SCRIPT:
            self._sink.register_script(
                group.handle,
                uri,
                resolved.dependencies,
                resolved.version,
                group.in_footer,
            )
            return
        self._sink.register_style(group.handle, uri, resolved.dependencies, resolved.version)

    def _groups_for(self, load_context: LoadContext) -> list[AssetGroup]:
        return [group for group in self._groups if group.load_context is load_context]

    def enqueue_assets(self, context: RequestContext) -> None:
        """Groups loaded on both the frontend and in the editor."""
        _ = context
        for group in self._groups_for(LoadContext.BOTH):
            self._register_group(group)

    def enqueue_frontend_styles(self, context: RequestContext) -> None:
        if context.is_admin or context.is_block_editor:
            return
        for group in self._groups_for(LoadContext.FRONTEND):
            self._register_group(group)

    def enqueue_editor_styles(self, context: RequestContext) -> None:
        if not context.is_block_editor:
            return
        for group in self._groups_for(LoadContext.EDITOR):
            self._register_group(group)

    def discover_block_stylesheets(self) -> dict[str, Tier]:
        """Per-block stylesheets by filename; the override tier replaces base files."""
        by_file: dict[str, Tier] = {}
        for tier in (Tier.BASE, Tier.OVERRIDE):
            for filename in self._store.list_files(
                tier, self.BLOCKS_DIR, self._STYLESHEET_SUFFIX
            ):
                by_file[filename] = tier
        return by_file

    def enqueue_block_styles(self, context: RequestContext | None = None) -> int:
        _ = context
        registered = 0
        for filename in self.discover_block_stylesheets():
            parsed = parse_block_filename(filename)
            if isinstance(parsed, InvalidBlockFilename):
                self._logger.warning(
                    "Skipping block stylesheet %s: %s", parsed.filename, parsed.reason
                )
                continue

            relative = f"{self.BLOCKS_DIR}/{filename}"
            resolved = self._resolver.resolve(relative)
            self._sink.register_block_style_variant(
                parsed.block_name,
                f"{self._prefix}-{parsed.stem}-style",
                self._resolver.uri_for(relative),
                resolved.timestamp_version,
            )
            registered += 1
        return registered

    def discover_block_style_variations(self) -> dict[tuple[str, str], Tier]:
        """``(block_slug, style)`` pairs from ``build/css/block-styles/<slug>/<style>.css``."""
        found: dict[tuple[str, str], Tier] = {}
        for tier in (Tier.BASE, Tier.OVERRIDE):
            for block_slug in self._store.list_dirs(tier, self.BLOCK_STYLES_DIR):
                for filename in self._store.list_files(
                    tier,
                    f"{self.BLOCK_STYLES_DIR}/{block_slug}",
                    self._STYLESHEET_SUFFIX,
                ):
                    style = filename[: -len(self._STYLESHEET_SUFFIX)]
                    found[(block_slug, style)] = tier
        return found

    def enqueue_block_style_variations(self, context: RequestContext | None = None) -> int:
        _ = context
        registered = 0
        for block_slug, style in self.discover_block_style_variations():
            relative = f"{self.BLOCK_STYLES_DIR}/{block_slug}/{style}{self._STYLESHEET_SUFFIX}"
            resolved = self._resolver.resolve(relative)
            self._sink.register_style(
                block_style_handle(self._prefix, block_slug, style),
                self._resolver.uri_for(relative),
                resolved.dependencies,
                resolved.version,
            )
            registered += 1
        return registered

    def install(self, hooks: HookRegistryProtocol, parent_prefix: str | None = None) -> None:
        if parent_prefix:
            for hook, suffix in self._PARENT_CALLBACKS:
                if hooks.remove_action(hook, f"{parent_prefix}_{suffix}"):
                    self._logger.debug("Removed parent callback %s_%s", parent_prefix, suffix)

        name = self.callback_prefix
        hooks.add_action(HOOK_BLOCK_ASSETS, f"{name}_enqueue_assets", self.enqueue_assets)
        hooks.add_action(
            HOOK_FRONTEND_ASSETS, f"{name}_enqueue_frontend_styles", self.enqueue_frontend_styles
        )
        hooks.add_action(
            HOOK_EDITOR_ASSETS, f"{name}_enqueue_editor_styles", self.enqueue_editor_styles
        )
        hooks.add_action(HOOK_INIT, f"{name}_enqueue_block_styles", self.enqueue_block_styles)
        hooks.add_action(
            HOOK_INIT,
            f"{name}_enqueue_block_style_variations",
            self.enqueue_block_style_variations,
        )
