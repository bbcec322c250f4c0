from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import final

from withkit_assets.domain.models.editor_extensions import (
    BlockStyleVariation,
    PatternCategory,
    block_style_handle,
    default_block_style_variations,
    default_pattern_categories,
)
from withkit_assets.domain.models.request_context import RequestContext
from withkit_assets.domain.protocols.enqueue_sink_protocol import EnqueueSinkProtocol
from withkit_assets.domain.protocols.hook_registry_protocol import HookRegistryProtocol
from withkit_assets.domain.workflows.register_assets import HOOK_INIT


@final
class RegisterEditorExtensions:
    """Pattern categories and block style variations for the block editor."""

    def __init__(
        self,
        sink: EnqueueSinkProtocol,
        prefix: str,
        logger: logging.Logger,
        variations: Sequence[BlockStyleVariation] | None = None,
        categories: Sequence[PatternCategory] | None = None,
    ) -> None:
        self._sink = sink
        self._prefix = prefix
        self._logger = logger
        self._variations = (
            tuple(variations) if variations is not None else default_block_style_variations()
        )
        self._categories = (
            tuple(categories) if categories is not None else default_pattern_categories(prefix)
        )

    def register_pattern_categories(self, context: RequestContext | None = None) -> None:
        _ = context
        for category in self._categories:
            self._sink.register_pattern_category(
                category.slug, category.label, category.description
            )

    def register_block_styles(self, context: RequestContext | None = None) -> None:
        _ = context
        for variation in self._variations:
            if "/" not in variation.block:
                self._logger.warning(
                    "Skipping block style %s: block type %r has no namespace",
                    variation.name,
                    variation.block,
                )
                continue
            self._sink.register_block_style(
                variation.block,
                variation.name,
                variation.label,
                block_style_handle(self._prefix, variation.block, variation.name),
            )

    def install(self, hooks: HookRegistryProtocol) -> None:
        name = self._prefix.replace("-", "_")
        hooks.add_action(
            HOOK_INIT,
            f"{name}_register_pattern_categories",
            self.register_pattern_categories,
            priority=1,
        )
        hooks.add_action(
            HOOK_INIT,
            f"{name}_register_block_style_variations",
            self.register_block_styles,
        )
