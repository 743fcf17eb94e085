"""PNG/JPEG decoding and PNG encoding.

The decoder is picked from the upload's filename, not sniffed from the
bytes: a ``.png`` extension (any case) selects the PNG decoder and
everything else the JPEG decoder. Bytes that do not match the chosen
decoder are rejected with :class:`~tilemark.errors.DecodeError`.
"""

from __future__ import annotations

import logging
import os
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from tilemark.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

PNG = "PNG"
JPEG = "JPEG"


def decoder_for(filename: Optional[str]) -> str:
    """Return the Pillow format name used to decode ``filename``."""
    _, ext = os.path.splitext(filename or "")
    return PNG if ext.lower() == ".png" else JPEG


def _to_8bit(img: Image.Image) -> Image.Image:
    # 16-bit grayscale (I;16*, I) and float images: scale 0..65535 down to
    # 0..255, since a direct convert clamps instead of scaling.
    if img.mode != "F":
        img = img.convert("I")
    return img.point(lambda v: v * (1 / 257)).convert("L")


def decode(data: bytes, filename: Optional[str]) -> Image.Image:
    """Decode raw image bytes into an RGBA raster.

    Args:
        data: Encoded image bytes.
        filename: Name the bytes were uploaded under; only its extension
            is used, to choose the decoder.

    Returns:
        A fully loaded ``RGBA`` image.

    Raises:
        DecodeError: If the bytes are empty, malformed, truncated or not
            in the format the filename implies.
    """
    fmt = decoder_for(filename)
    if not data:
        raise DecodeError(f"Failed to decode image {filename!r}: no data")
    try:
        img = Image.open(BytesIO(data), formats=[fmt])
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Failed to decode image {filename!r} as {fmt}: {exc}") from exc
    if img.mode == "F" or img.mode.startswith("I"):
        img = _to_8bit(img)
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    logger.debug("Decoded %s as %s (%dx%d)", filename, fmt, img.width, img.height)
    return img


def encode_png(img: Image.Image) -> bytes:
    """Encode a raster as PNG bytes.

    Raises:
        EncodeError: If Pillow cannot write the image.
    """
    buffer = BytesIO()
    try:
        img.save(buffer, format=PNG)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Failed to encode PNG: {exc}") from exc
    return buffer.getvalue()
