"""
Data Models
===========

Value types and state models for pixel-brush.

Models:
    Pixel:
        - PaletteEntry: One reference color (index + RGB)
        - ColorMatch: Nearest palette index plus exactness flag
        - PixelRecord: One (x, y, color_id) unit of paint work

    State:
        - WorkerState: Worker lifecycle states
        - TerminationReason: Why a worker stopped
        - WorkerReport: Final per-worker snapshot
"""

from pixel_brush.models.pixel import RGB, ColorMatch, PaletteEntry, PixelRecord
from pixel_brush.models.state import TerminationReason, WorkerReport, WorkerState

__all__ = [
    # Pixel
    "RGB",
    "PaletteEntry",
    "ColorMatch",
    "PixelRecord",
    # State
    "WorkerState",
    "TerminationReason",
    "WorkerReport",
]
