"""
Canvas Module
=============

Everything that turns an image into paint commands.

Components:
    - PixelSource: Row-major, quantizing walk over the image raster
    - SharedPixelSource: Lock-guarded source shared by all workers
    - encode / decode: The 4-byte single-pixel wire command
"""

from pixel_brush.canvas.constants import (
    CANVAS_HEIGHT,
    CANVAS_SIZE,
    CANVAS_WIDTH,
    COMMAND_LENGTH,
    PALETTE_SIZE,
)
from pixel_brush.canvas.encoder import decode, encode
from pixel_brush.canvas.pixel_source import PixelSource, SharedPixelSource

__all__ = [
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "CANVAS_SIZE",
    "COMMAND_LENGTH",
    "PALETTE_SIZE",
    "encode",
    "decode",
    "PixelSource",
    "SharedPixelSource",
]
