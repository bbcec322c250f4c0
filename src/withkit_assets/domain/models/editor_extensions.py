from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BlockStyleVariation:
    block: str
    name: str
    label: str


@dataclass(frozen=True, slots=True)
class PatternCategory:
    slug: str
    label: str
    description: str


def block_style_handle(prefix: str, block: str, name: str) -> str:
    return f"{prefix}-block-style-{block.replace('/', '-')}-{name}"


def default_block_style_variations() -> tuple[BlockStyleVariation, ...]:
    return (
        BlockStyleVariation(
            block="core/paragraph",
            name="with-test-block-style",
            label="Test Block Style",
        ),
    )


def default_pattern_categories(prefix: str) -> tuple[PatternCategory, ...]:
    return (
        PatternCategory(
            slug=f"{prefix}/test",
            label="Test Category",
            description="Test patterns for WithKit Starter.",
        ),
    )
