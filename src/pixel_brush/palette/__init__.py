"""
Palette Module
==============

The canvas palette and nearest-color quantization.

Components:
    - Palette: Immutable ordered set of reference colors
    - ColorQuantizer: Resolves any RGB triple to a palette index
"""

from pixel_brush.palette.colors import DEFAULT_PALETTE, PALETTE_HEX, Palette, hex_to_rgb
from pixel_brush.palette.quantizer import ColorQuantizer

__all__ = [
    "PALETTE_HEX",
    "DEFAULT_PALETTE",
    "Palette",
    "hex_to_rgb",
    "ColorQuantizer",
]
