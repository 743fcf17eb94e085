"""Aspect-preserving scale-to-fit with letterboxing."""

from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image

from tilemark.errors import InvalidGeometryError
from tilemark.geometry import clip

logger = logging.getLogger(__name__)

BLACK = (0, 0, 0, 255)


def check_target(target_width: int, target_height: int) -> None:
    """Raise :class:`InvalidGeometryError` unless both target sides are positive."""
    if target_width <= 0 or target_height <= 0:
        raise InvalidGeometryError(
            f"Target size must be positive, got {target_width}x{target_height}"
        )


def fit_geometry(
    src_size: Tuple[int, int], target_width: int, target_height: int
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Compute the scaled size and placement of ``src_size`` in the target box.

    The axis with the smaller scale factor constrains the fit and is filled
    exactly; the other axis is centered and padded.

    Returns:
        ``((dest_width, dest_height), (dest_x, dest_y))``.
    """
    check_target(target_width, target_height)
    src_width, src_height = src_size
    aspect_w = target_width / src_width
    aspect_h = target_height / src_height

    height_limited = aspect_h < aspect_w
    scale = aspect_h if height_limited else aspect_w

    # Never collapse a very thin source to nothing.
    dest_width = max(1, round(src_width * scale))
    dest_height = max(1, round(src_height * scale))

    if height_limited:
        offset = ((target_width - dest_width) // 2, 0)
    else:
        offset = (0, (target_height - dest_height) // 2)
    return (dest_width, dest_height), offset


def fit(
    src: Image.Image,
    target_width: int,
    target_height: int,
    background: Tuple[int, int, int, int] = BLACK,
    swapped_passthrough: bool = True,
) -> Image.Image:
    """Scale ``src`` into a ``target_width`` x ``target_height`` canvas.

    The source keeps its aspect ratio, is resampled bilinearly, and is
    centered on the unconstrained axis. The margin is filled with the
    opaque ``background`` colour.

    Args:
        src: Source raster.
        target_width: Output width in pixels.
        target_height: Output height in pixels.
        background: RGBA fill for the letterbox/pillarbox margin.
        swapped_passthrough: Return ``src`` untouched when its height equals
            ``target_width`` and its width equals ``target_height``. This
            reproduces the behaviour of the service this replaces; turn it
            off to always get a ``target_width`` x ``target_height`` result.

    Raises:
        InvalidGeometryError: If either target dimension is not positive.
    """
    check_target(target_width, target_height)
    if swapped_passthrough and src.height == target_width and src.width == target_height:
        logger.debug(
            "Source %dx%d matches swapped target %dx%d, returning it unchanged",
            src.width, src.height, target_width, target_height,
        )
        return src

    if src.mode != "RGBA":
        src = src.convert("RGBA")

    dest_size, offset = fit_geometry(src.size, target_width, target_height)
    logger.debug("Fitting %dx%d into %dx%d: scaled to %dx%d at %s",
                 src.width, src.height, target_width, target_height,
                 dest_size[0], dest_size[1], offset)

    scaled = src.resize(dest_size, Image.Resampling.BILINEAR)

    canvas = Image.new("RGBA", (target_width, target_height), background)
    placement = clip(canvas.size, scaled.size, offset)
    if placement is not None:
        crop, position = placement
        # Plain copy: the scaled pixels, alpha included, replace the fill.
        canvas.paste(scaled.crop(crop.box()), position)
    return canvas
