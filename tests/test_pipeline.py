"""End-to-end tests for ``CompositionPipeline`` and ``compose``."""

import io

import pytest
from PIL import Image

import tilemark.pipeline as pipeline_module
from tilemark import CompositionPipeline, compose
from tilemark.errors import DecodeError, EncodeError, InvalidGeometryError

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)


def _open(data):
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def test_compose_jpeg_base_with_png_watermark(make_image, encode, png_bytes):
    base = encode(make_image((2000, 1000), mode="RGB"), "JPEG")
    watermark = png_bytes((100, 50), (255, 255, 255, 0))
    out = compose(base, "photo.jpg", watermark, "logo.png", 1024, 768)
    img = _open(out)
    assert img.format == "PNG"
    assert img.size == (1024, 768)
    # A fully transparent watermark leaves the letterbox fill visible.
    assert img.convert("RGBA").getpixel((512, 10)) == (0, 0, 0, 255)


def test_opaque_watermark_covers_result(png_bytes):
    pipeline = CompositionPipeline(64, 48)
    out = pipeline.compose(png_bytes((80, 60), RED), "base.png", png_bytes((7, 5), GREEN), "wm.png")
    img = _open(out).convert("RGBA")
    assert img.getcolors() == [(64 * 48, GREEN)]


def test_background_setting_reaches_the_letterbox(png_bytes):
    pipeline = CompositionPipeline(64, 48, background=(0, 0, 255, 255))
    out = pipeline.compose(png_bytes((64, 10), RED), "base.png", png_bytes((4, 4), (0, 0, 0, 0)), "wm.png")
    assert _open(out).convert("RGBA").getpixel((0, 0)) == (0, 0, 255, 255)


def test_bad_base_aborts_before_fitting(monkeypatch, png_bytes):
    def fail(*args, **kwargs):
        raise AssertionError("fit must not run")

    monkeypatch.setattr(pipeline_module, "fit", fail)
    with pytest.raises(DecodeError):
        compose(b"garbage", "base.png", png_bytes((4, 4)), "wm.png", 64, 48)


def test_bad_watermark_is_reported(png_bytes):
    with pytest.raises(DecodeError):
        compose(png_bytes((10, 10)), "base.png", png_bytes((4, 4)), "wm.jpg", 64, 48)


def test_encode_failure_propagates(monkeypatch, png_bytes):
    def fail(img):
        raise EncodeError("disk on fire")

    monkeypatch.setattr("tilemark.codec.encode_png", fail)
    with pytest.raises(EncodeError):
        compose(png_bytes((10, 10)), "base.png", png_bytes((4, 4)), "wm.png", 64, 48)


@pytest.mark.parametrize("target", [(0, 48), (64, 0), (-64, 48)])
def test_invalid_target_is_rejected(target):
    with pytest.raises(InvalidGeometryError):
        CompositionPipeline(*target)


def test_swapped_passthrough_keeps_source_size(png_bytes):
    base = png_bytes((48, 64), RED)
    watermark = png_bytes((4, 4), (0, 0, 0, 0))
    kept = CompositionPipeline(64, 48).compose(base, "base.png", watermark, "wm.png")
    assert _open(kept).size == (48, 64)

    fitted = CompositionPipeline(64, 48, swapped_passthrough=False).compose(base, "base.png", watermark, "wm.png")
    assert _open(fitted).size == (64, 48)
