"""
Command Encoder
===============

Packs a PixelRecord into the canvas service's single-pixel command.

Wire Format:
    One binary WebSocket message of exactly 4 bytes, holding a
    little-endian signed 32-bit integer:

        value = x + y * 1590 + color_id * 636000

    No framing byte, no header.
"""

import struct

from pixel_brush.canvas.constants import (
    CANVAS_HEIGHT,
    CANVAS_SIZE,
    CANVAS_WIDTH,
    COMMAND_LENGTH,
    PALETTE_SIZE,
)
from pixel_brush.models.pixel import PixelRecord


_COMMAND = struct.Struct("<i")


def encode(record: PixelRecord) -> bytes:
    """
    Encode a pixel record as a 4-byte paint command.

    Raises:
        ValueError: If the record lies off the canvas or the color id
            is outside the palette
    """
    if not (0 <= record.x < CANVAS_WIDTH and 0 <= record.y < CANVAS_HEIGHT):
        raise ValueError(f"Pixel {{{record.x}:{record.y}}} is off the canvas")
    if not 0 <= record.color_id < PALETTE_SIZE:
        raise ValueError(f"Color id {record.color_id} is outside the palette")

    value = record.x + record.y * CANVAS_WIDTH + record.color_id * CANVAS_SIZE
    return _COMMAND.pack(value)


def decode(data: bytes) -> PixelRecord:
    """
    Decode a 4-byte paint command back into a pixel record.

    Raises:
        ValueError: If data is not exactly 4 bytes or decodes to a
            negative value
    """
    if len(data) != COMMAND_LENGTH:
        raise ValueError(f"Command must be {COMMAND_LENGTH} bytes, got {len(data)}")

    (value,) = _COMMAND.unpack(data)
    if value < 0:
        raise ValueError(f"Negative command value: {value}")

    color_id, position = divmod(value, CANVAS_SIZE)
    y, x = divmod(position, CANVAS_WIDTH)
    return PixelRecord(x=x, y=y, color_id=color_id)
