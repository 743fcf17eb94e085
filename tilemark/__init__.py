"""Watermark tiling and aspect-fit composition.

This package contains the image pipeline behind the ``/watermark``
endpoint: decoding uploads, fitting the base image into a fixed canvas,
tiling the watermark over it and encoding the result as PNG. The HTTP
service lives in ``main.py`` and the command-line client in
:mod:`tilemark.client`.
"""

from tilemark.errors import DecodeError, EncodeError, InvalidGeometryError, TilemarkError
from tilemark.pipeline import CompositionPipeline, compose

__all__ = [
    "CompositionPipeline",
    "DecodeError",
    "EncodeError",
    "InvalidGeometryError",
    "TilemarkError",
    "compose",
]

__version__ = "0.1.0"
