from withkit_assets.application.transforms.raster_transform import (
    PassthroughTransform,
    RasterTransform,
    raster_transform_for,
    webp_copy_transform,
)
from withkit_assets.application.transforms.svg_transform import SvgMinifyTransform

__all__ = [
    "PassthroughTransform",
    "RasterTransform",
    "SvgMinifyTransform",
    "raster_transform_for",
    "webp_copy_transform",
]
