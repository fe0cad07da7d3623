"""
Canvas Constants
================

Fixed magnitudes of the remote canvas service.

These values define the wire format and must match the service
bit-for-bit:

    command = x + y * CANVAS_WIDTH + color_id * CANVAS_SIZE
"""

CANVAS_WIDTH: int = 1590
CANVAS_HEIGHT: int = 400
CANVAS_SIZE: int = CANVAS_WIDTH * CANVAS_HEIGHT  # 636000
PALETTE_SIZE: int = 25
COMMAND_LENGTH: int = 4
