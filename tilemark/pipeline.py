"""Decode, fit, tile and encode: one composition request end to end."""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

from tilemark import codec
from tilemark.resize import BLACK, check_target, fit
from tilemark.tiler import tile_overlay

logger = logging.getLogger(__name__)

DEFAULT_TARGET = (1024, 768)


class CompositionPipeline:
    """Composes a base image and a watermark into a fixed-size PNG.

    A pipeline only carries its settings; every call to :meth:`compose`
    works on its own rasters, so one instance can serve concurrent
    requests.
    """

    def __init__(
        self,
        target_width: int = DEFAULT_TARGET[0],
        target_height: int = DEFAULT_TARGET[1],
        background: Tuple[int, int, int, int] = BLACK,
        swapped_passthrough: bool = True,
    ) -> None:
        check_target(target_width, target_height)
        self.target_width = target_width
        self.target_height = target_height
        self.background = background
        self.swapped_passthrough = swapped_passthrough

    def compose(
        self,
        base_bytes: bytes,
        base_name: Optional[str],
        watermark_bytes: bytes,
        watermark_name: Optional[str],
    ) -> bytes:
        """Run the whole pipeline and return the result as PNG bytes.

        Raises:
            DecodeError: If either input cannot be decoded.
            InvalidGeometryError: If the watermark has a zero-sized side.
            EncodeError: If the result cannot be written as PNG.
        """
        start = time.monotonic()
        base = codec.decode(base_bytes, base_name)
        watermark = codec.decode(watermark_bytes, watermark_name)

        fitted = fit(
            base,
            self.target_width,
            self.target_height,
            background=self.background,
            swapped_passthrough=self.swapped_passthrough,
        )
        result = tile_overlay(fitted, watermark)
        png = codec.encode_png(result)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Composed %s (%dx%d) with watermark %s (%dx%d) into %dx%d PNG, %d bytes in %dms",
            base_name, base.width, base.height,
            watermark_name, watermark.width, watermark.height,
            result.width, result.height, len(png), elapsed_ms,
        )
        return png


def compose(
    base_bytes: bytes,
    base_name: Optional[str],
    watermark_bytes: bytes,
    watermark_name: Optional[str],
    target_width: int = DEFAULT_TARGET[0],
    target_height: int = DEFAULT_TARGET[1],
) -> bytes:
    """Compose once with default settings. See :meth:`CompositionPipeline.compose`."""
    pipeline = CompositionPipeline(target_width, target_height)
    return pipeline.compose(base_bytes, base_name, watermark_bytes, watermark_name)
