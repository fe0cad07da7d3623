"""
Color Quantizer
===============

Maps an arbitrary RGB color to the nearest palette entry.

Distance is plain squared Euclidean distance in RGB space. The scan is
in palette order, so on ties the earliest entry wins, and an exact
match returns immediately.
"""

from typing import Optional

from pixel_brush.models.pixel import ColorMatch
from pixel_brush.palette.colors import DEFAULT_PALETTE, Palette


class ColorQuantizer:
    """
    Nearest-color resolver over a fixed palette.

    Attributes:
        palette: Palette to resolve against

    Example:
        quantizer = ColorQuantizer()
        match = quantizer.resolve(250, 250, 250)
        match.index, match.exact  # (0, False)
    """

    def __init__(self, palette: Optional[Palette] = None) -> None:
        self.palette = palette if palette is not None else DEFAULT_PALETTE

    def resolve(self, r: int, g: int, b: int) -> ColorMatch:
        """
        Resolve a color to its nearest palette index.

        Args:
            r, g, b: Color channels, 0..255

        Returns:
            ColorMatch with exact=True on a zero-distance match
        """
        r, g, b = int(r), int(g), int(b)
        best_index = 0
        best_distance: Optional[int] = None

        for entry in self.palette:
            pr, pg, pb = entry.rgb
            distance = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
            if distance == 0:
                return ColorMatch(index=entry.index, exact=True)
            # strict comparison keeps the earliest index on ties
            if best_distance is None or distance < best_distance:
                best_index = entry.index
                best_distance = distance

        return ColorMatch(index=best_index, exact=False)
