"""
Canvas Palette
==============

The fixed, ordered set of colors the remote canvas accepts.

The position of a color in PALETTE_HEX is its wire color id, so the
order is load-bearing and must never change.
"""

from typing import Iterator, Sequence, Tuple

from pixel_brush.models.pixel import RGB, PaletteEntry


PALETTE_HEX: Tuple[str, ...] = (
    "#FFFFFF", "#C2C2C2", "#858585", "#474747", "#000000",
    "#3AAFFF", "#71AAEB", "#4A76A8", "#074BF3", "#5E30EB",
    "#FF6C5B", "#FE2500", "#FF218B", "#99244F", "#4D2C9C",
    "#FFCF4A", "#FEB43F", "#FE8648", "#FF5B36", "#DA5100",
    "#94E044", "#5CBF0D", "#C3D117", "#FCC700", "#D38301",
)


def hex_to_rgb(value: str) -> RGB:
    """
    Decode a "#RRGGBB" string into an (r, g, b) triple.

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {value!r}")
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


class Palette:
    """
    Immutable ordered list of palette entries.

    Built once at startup and passed by reference to whoever needs it.

    Example:
        palette = Palette.from_hex(PALETTE_HEX)
        palette[4].rgb  # (0, 0, 0)
    """

    __slots__ = ("_entries",)

    def __init__(self, colors: Sequence[RGB]) -> None:
        if not colors:
            raise ValueError("Palette must contain at least one color")
        self._entries: Tuple[PaletteEntry, ...] = tuple(
            PaletteEntry(index=i, rgb=tuple(rgb)) for i, rgb in enumerate(colors)
        )

    @classmethod
    def from_hex(cls, hex_colors: Sequence[str]) -> "Palette":
        return cls([hex_to_rgb(h) for h in hex_colors])

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> PaletteEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Palette({len(self._entries)} colors)"


DEFAULT_PALETTE = Palette.from_hex(PALETTE_HEX)
