from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from withkit_assets.application.transforms.raster_transform import (
    PassthroughTransform,
    RasterTransform,
    raster_transform_for,
    webp_copy_transform,
)
from withkit_assets.domain.errors import TransformError


def _image_bytes(size: tuple[int, int], fmt: str, mode: str = "RGB") -> bytes:
    color = (200, 40, 40, 128) if mode == "RGBA" else (200, 40, 40)
    output = BytesIO()
    Image.new(mode, size, color).save(output, format=fmt)
    return output.getvalue()


def _open(content: bytes) -> Image.Image:
    image = Image.open(BytesIO(content))
    image.load()
    return image


def test_raster_transform_given_narrow_image_when_applied_then_never_upscales() -> None:
    transform = RasterTransform("JPEG", 50, max_width=2560)

    result = _open(transform.apply(_image_bytes((120, 80), "JPEG")))

    assert result.size == (120, 80)
    assert result.format == "JPEG"


def test_raster_transform_given_wide_image_when_applied_then_downscales_keeping_ratio() -> None:
    transform = RasterTransform("JPEG", 50, max_width=100)

    result = _open(transform.apply(_image_bytes((400, 200), "PNG")))

    assert result.size == (100, 50)


def test_raster_transform_given_png_when_applied_then_palette_quantised() -> None:
    transform = raster_transform_for(".PNG", max_width=2560)

    result = _open(transform.apply(_image_bytes((32, 32), "PNG", mode="RGBA")))

    assert result.format == "PNG"
    assert result.mode == "P"


def test_raster_transform_given_transparent_png_when_jpeg_encoded_then_converts_to_rgb() -> None:
    transform = RasterTransform("JPEG", 50, max_width=2560)

    result = _open(transform.apply(_image_bytes((16, 16), "PNG", mode="RGBA")))

    assert result.mode == "RGB"


def test_webp_copy_transform_given_jpeg_when_applied_then_emits_webp() -> None:
    transform = webp_copy_transform(max_width=64)

    result = _open(transform.apply(_image_bytes((128, 64), "JPEG")))

    assert transform.quality == 60
    assert result.format == "WEBP"
    assert result.size == (64, 32)


def test_raster_transform_for_given_suffixes_when_selected_then_uses_format_quality() -> None:
    jpeg = raster_transform_for(".jpeg", 2560)
    webp = raster_transform_for(".webp", 2560)

    assert isinstance(jpeg, RasterTransform)
    assert (jpeg.output_format, jpeg.quality) == ("JPEG", 50)
    assert isinstance(webp, RasterTransform)
    assert (webp.output_format, webp.quality) == ("WEBP", 70)
    assert isinstance(raster_transform_for(".gif", 2560), PassthroughTransform)
    assert raster_transform_for(".gif", 2560).apply(b"GIF89a") == b"GIF89a"


def test_raster_transform_given_corrupt_bytes_when_applied_then_raises_transform_error() -> None:
    with pytest.raises(TransformError):
        _ = RasterTransform("PNG", 50, 2560).apply(b"not an image")


def test_raster_transform_given_unknown_format_when_created_then_raises() -> None:
    with pytest.raises(ValueError):
        _ = RasterTransform("BMP", 50, 2560)
