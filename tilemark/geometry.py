"""Integer rectangles and the placement math shared by the resizer and tiler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Rect:
    """An axis-aligned integer rectangle.

    Used both as a crop region inside a source image and as a placement
    inside a destination canvas. Width and height are never negative;
    an empty intersection is represented by a zero-sized rect.
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def intersect(self, other: "Rect") -> "Rect":
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return Rect(left, top, 0, 0)
        return Rect(left, top, right - left, bottom - top)

    def translate(self, dx: int, dy: int) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def box(self) -> Tuple[int, int, int, int]:
        """Return the rect as a Pillow ``(left, upper, right, lower)`` box."""
        return (self.x, self.y, self.right, self.bottom)


def clip(
    dest_size: Tuple[int, int],
    src_size: Tuple[int, int],
    offset: Tuple[int, int],
) -> Optional[Tuple[Rect, Tuple[int, int]]]:
    """Clip a source placed at ``offset`` against a destination canvas.

    Only the sub-rectangle where source and destination overlap is kept;
    nothing wraps around and nothing outside the canvas is written.

    Args:
        dest_size: ``(width, height)`` of the destination canvas.
        src_size: ``(width, height)`` of the source image.
        offset: Position of the source's top-left corner in destination
            coordinates. May be negative.

    Returns:
        ``(crop, position)`` where ``crop`` is the region to take from the
        source and ``position`` the non-negative point to place it at, or
        ``None`` when the two do not overlap at all.
    """
    dest = Rect(0, 0, *dest_size)
    placed = Rect(offset[0], offset[1], *src_size)
    overlap = dest.intersect(placed)
    if overlap.is_empty():
        return None
    crop = overlap.translate(-offset[0], -offset[1])
    return crop, (overlap.x, overlap.y)


@dataclass(frozen=True)
class TileLayout:
    """How many watermark tiles make up the mosaic and where it sits.

    ``offset_x``/``offset_y`` locate the mosaic's top-left corner relative
    to the base image's top-left corner; they are usually negative so the
    mosaic overhangs every edge of the base.
    """

    columns: int
    rows: int
    offset_x: int
    offset_y: int
    tile_width: int
    tile_height: int

    @property
    def mosaic_width(self) -> int:
        return self.columns * self.tile_width

    @property
    def mosaic_height(self) -> int:
        return self.rows * self.tile_height

    @property
    def mosaic_size(self) -> Tuple[int, int]:
        return (self.mosaic_width, self.mosaic_height)
