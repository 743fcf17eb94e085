"""Error types raised by the composition pipeline.

Every stage of the pipeline raises one of these when it cannot continue.
The HTTP layer in ``main.py`` maps them onto status codes and the CLI
client prints them; library code never swallows them.
"""

from __future__ import annotations


class TilemarkError(Exception):
    """Base class for all pipeline failures."""


class DecodeError(TilemarkError):
    """The input bytes are malformed or do not match the selected decoder."""


class InvalidGeometryError(TilemarkError):
    """A target size or watermark size is not usable (zero or negative)."""


class EncodeError(TilemarkError):
    """The composed raster could not be written out as PNG."""
