from __future__ import annotations

from io import BytesIO
from typing import ClassVar, final
from typing_extensions import override

from PIL import Image, UnidentifiedImageError

from withkit_assets.domain.errors import TransformError
from withkit_assets.domain.protocols.transform_protocol import TransformProtocol

RASTER_SUFFIXES: frozenset[str] = frozenset({".jpg", ".jpeg", ".png", ".avif", ".webp"})
WEBP_COPY_QUALITY = 60


@final
class PassthroughTransform(TransformProtocol):
    @override
    def apply(self, content: bytes) -> bytes:
        return content


@final
class RasterTransform(TransformProtocol):
    """Downscale to ``max_width`` (never upscale) and re-encode."""

    _MODES_BY_FORMAT: ClassVar[dict[str, frozenset[str]]] = {
        "JPEG": frozenset({"RGB", "L", "CMYK"}),
        "PNG": frozenset({"RGB", "RGBA", "L", "LA", "P"}),
        "WEBP": frozenset({"RGB", "RGBA"}),
        "AVIF": frozenset({"RGB", "RGBA"}),
    }

    def __init__(self, output_format: str, quality: int, max_width: int) -> None:
        normalized = output_format.upper()
        if normalized not in self._MODES_BY_FORMAT:
            raise ValueError(f"Unsupported raster format: {output_format}")
        self._format = normalized
        self._quality = max(1, min(100, int(quality)))
        self._max_width = max(1, int(max_width))

    @property
    def output_format(self) -> str:
        return self._format

    @property
    def quality(self) -> int:
        return self._quality

    def _resize(self, image: Image.Image) -> Image.Image:
        width, height = image.size
        if width <= self._max_width:
            return image
        target_height = max(1, round(height * self._max_width / width))
        return image.resize((self._max_width, target_height), Image.Resampling.LANCZOS)

    def _prepare_mode(self, image: Image.Image) -> Image.Image:
        if image.mode in self._MODES_BY_FORMAT[self._format]:
            return image
        has_alpha = "A" in image.getbands() or "transparency" in image.info
        if self._format == "JPEG" or not has_alpha:
            return image.convert("RGB")
        return image.convert("RGBA")

    def _encode(self, image: Image.Image) -> bytes:
        output = BytesIO()
        if self._format == "PNG":
            if self._quality < 100 and image.mode in {"RGB", "RGBA"}:
                image = image.quantize(colors=256)
            image.save(output, format="PNG", optimize=True)
        elif self._format == "JPEG":
            image.save(output, format="JPEG", quality=self._quality, optimize=True)
        else:
            image.save(output, format=self._format, quality=self._quality)
        return output.getvalue()

    @override
    def apply(self, content: bytes) -> bytes:
        try:
            with Image.open(BytesIO(content)) as source:
                source.load()
                image = self._prepare_mode(self._resize(source))
                return self._encode(image)
        except (UnidentifiedImageError, OSError, ValueError, KeyError) as exc:
            raise TransformError(f"{self._format} transform failed: {exc}") from exc


def raster_transform_for(suffix: str, max_width: int) -> TransformProtocol:
    """Same-format re-encode for a source extension; unknown extensions pass through."""
    match suffix.lower():
        case ".jpg" | ".jpeg":
            return RasterTransform("JPEG", 50, max_width)
        case ".png":
            return RasterTransform("PNG", 50, max_width)
        case ".avif":
            return RasterTransform("AVIF", 50, max_width)
        case ".webp":
            return RasterTransform("WEBP", 70, max_width)
        case _:
            return PassthroughTransform()


def webp_copy_transform(max_width: int) -> RasterTransform:
    return RasterTransform("WEBP", WEBP_COPY_QUALITY, max_width)
