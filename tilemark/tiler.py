"""Tiled watermark overlay.

The watermark is repeated into a mosaic that is larger than the base
image on every side, the mosaic is centered on the base, and the part
that lands on the base is alpha-composited over it.
"""

from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image

from tilemark.errors import InvalidGeometryError
from tilemark.geometry import TileLayout, clip

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


def _pad_count(count: int) -> int:
    # Even counts get one extra tile so the centered mosaic still overhangs both edges.
    return count + 3 if count % 2 == 0 else count + 2


def plan_layout(base_size: Tuple[int, int], watermark_size: Tuple[int, int]) -> TileLayout:
    """Work out the tile grid and the mosaic offset for a base/watermark pair.

    Raises:
        InvalidGeometryError: If the watermark has a zero or negative side.
    """
    base_width, base_height = base_size
    tile_width, tile_height = watermark_size
    if tile_width <= 0 or tile_height <= 0:
        raise InvalidGeometryError(
            f"Watermark size must be positive, got {tile_width}x{tile_height}"
        )

    columns = _pad_count(base_width // tile_width)
    rows = _pad_count(base_height // tile_height)

    mosaic_width = columns * tile_width
    mosaic_height = rows * tile_height
    return TileLayout(
        columns=columns,
        rows=rows,
        offset_x=base_width // 2 - mosaic_width // 2,
        offset_y=base_height // 2 - mosaic_height // 2,
        tile_width=tile_width,
        tile_height=tile_height,
    )


def build_mosaic(watermark: Image.Image, layout: TileLayout) -> Image.Image:
    """Repeat ``watermark`` into a ``layout.columns`` x ``layout.rows`` grid.

    Tiles are written row by row without a mask, so adjacent tiles never
    blend with each other or with the transparent starting canvas.
    """
    if watermark.mode != "RGBA":
        watermark = watermark.convert("RGBA")
    mosaic = Image.new("RGBA", layout.mosaic_size, TRANSPARENT)
    for row in range(layout.rows):
        y = row * layout.tile_height
        for column in range(layout.columns):
            mosaic.paste(watermark, (column * layout.tile_width, y))
    return mosaic


def tile_overlay(base: Image.Image, watermark: Image.Image) -> Image.Image:
    """Composite a centered watermark mosaic over ``base``.

    The result has the same size as ``base``. Transparent mosaic pixels
    leave the base untouched, opaque ones replace it and partially
    transparent ones blend ("over" operator). Mosaic pixels outside the
    base are dropped.
    """
    layout = plan_layout(base.size, watermark.size)
    logger.debug("Tiling %dx%d watermark as %dx%d grid at (%d, %d)",
                 layout.tile_width, layout.tile_height, layout.columns, layout.rows,
                 layout.offset_x, layout.offset_y)

    mosaic = build_mosaic(watermark, layout)

    result = base.convert("RGBA") if base.mode != "RGBA" else base.copy()
    placement = clip(result.size, mosaic.size, (layout.offset_x, layout.offset_y))
    if placement is not None:
        crop, position = placement
        result.alpha_composite(mosaic.crop(crop.box()), dest=position)
    return result
