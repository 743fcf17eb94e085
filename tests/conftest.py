"""Shared fixtures: in-memory test images."""

import io

import pytest
from PIL import Image


@pytest.fixture
def make_image():
    """Return a factory for solid-colour Pillow images."""

    def _make(size, color=(255, 0, 0, 255), mode="RGBA"):
        if mode == "RGB" and len(color) == 4:
            color = color[:3]
        return Image.new(mode, size, color)

    return _make


@pytest.fixture
def encode():
    """Return a helper that encodes an image to PNG or JPEG bytes."""

    def _encode(img, fmt="PNG"):
        buf = io.BytesIO()
        if fmt == "JPEG" and img.mode != "RGB":
            img = img.convert("RGB")
        img.save(buf, format=fmt)
        return buf.getvalue()

    return _encode


@pytest.fixture
def png_bytes(make_image, encode):
    """Return a factory for PNG-encoded solid-colour images."""

    def _png(size, color=(255, 0, 0, 255)):
        return encode(make_image(size, color), "PNG")

    return _png
