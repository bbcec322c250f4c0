from __future__ import annotations

import pytest

from withkit_assets.domain.models.block_name import (
    InvalidBlockFilename,
    ParsedBlockName,
    parse_block_filename,
    resolve_block_name,
)


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("core-paragraph.css", "core/paragraph"),
        ("core-quote.css", "core/quote"),
        ("my-custom-block-name.css", "my/custom-block-name"),
        ("woocommerce-product-price.css", "woocommerce/product-price"),
    ],
)
def test_parse_block_filename_given_hyphenated_name_when_parsed_then_splits_on_first_hyphen(
    filename: str, expected: str
) -> None:
    parsed = parse_block_filename(filename)

    assert isinstance(parsed, ParsedBlockName)
    assert parsed.block_name == expected
    assert parsed.stem == filename.removesuffix(".css")


@pytest.mark.parametrize("filename", ["paragraph.css", "-paragraph.css", "core-.css"])
def test_parse_block_filename_given_unusable_name_when_parsed_then_returns_invalid(
    filename: str,
) -> None:
    parsed = parse_block_filename(filename)

    assert isinstance(parsed, InvalidBlockFilename)
    assert parsed.filename == filename
    assert parsed.reason


def test_resolve_block_name_given_invalid_name_when_called_then_returns_none() -> None:
    assert resolve_block_name("paragraph.css") is None
    assert resolve_block_name("core-list-item.css") == "core/list-item"
