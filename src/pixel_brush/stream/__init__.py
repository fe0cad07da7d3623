"""
Stream Module
=============

Input and output edges of pixel-brush: the WebSocket transport to the
canvas service and the image file decoder.

Example:
    from pixel_brush.stream import ConnectionSlot, open_connection

    connection = await open_connection("wss://canvas.example/ws")
    slot = ConnectionSlot(connection.url, connection, open_connection)
    await slot.send(command)
"""

from pixel_brush.stream.connection import (
    CanvasConnection,
    ConnectionSlot,
    Connector,
    open_connection,
)
from pixel_brush.stream.image_loader import load_raster, to_rgb


__all__ = [
    "CanvasConnection",
    "ConnectionSlot",
    "Connector",
    "open_connection",
    "load_raster",
    "to_rgb",
]
