"""
Pixel Data Models
=================

Immutable value types passed between the palette, the pixel source
and the encoder.

Design Rules:
    - All types are frozen; nothing downstream may mutate them
    - PixelRecord coordinates are ABSOLUTE canvas coordinates
"""

from dataclasses import dataclass
from typing import Tuple


RGB = Tuple[int, int, int]


@dataclass(frozen=True, slots=True)
class PaletteEntry:
    """
    One reference color of the canvas palette.

    Attributes:
        index: Position in the palette (the wire color id)
        rgb: Color as an (r, g, b) triple of 0..255 ints
    """

    index: int
    rgb: RGB


@dataclass(frozen=True, slots=True)
class ColorMatch:
    """
    Result of quantizing one color against the palette.

    Attributes:
        index: Index of the nearest palette entry
        exact: True when the input color is a palette color
    """

    index: int
    exact: bool


@dataclass(frozen=True, slots=True)
class PixelRecord:
    """
    One unit of paint work.

    Attributes:
        x: Absolute canvas column
        y: Absolute canvas row
        color_id: Palette index to paint with
    """

    x: int
    y: int
    color_id: int

    def __repr__(self) -> str:
        return f"PixelRecord({{{self.x}:{self.y}}} -> {self.color_id})"
