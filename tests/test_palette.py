"""
Palette & Quantizer Tests
=========================
"""

import pytest

from pixel_brush.palette import DEFAULT_PALETTE, PALETTE_HEX, ColorQuantizer, Palette, hex_to_rgb


class TestPalette:
    """Tests for the fixed canvas palette."""

    def test_palette_has_25_colors(self):
        assert len(DEFAULT_PALETTE) == 25
        assert len(PALETTE_HEX) == 25

    def test_palette_order_and_values(self):
        assert DEFAULT_PALETTE[0].rgb == (255, 255, 255)
        assert DEFAULT_PALETTE[4].rgb == (0, 0, 0)
        assert DEFAULT_PALETTE[5].rgb == (0x3A, 0xAF, 0xFF)
        assert DEFAULT_PALETTE[24].rgb == (0xD3, 0x83, 0x01)
        assert [entry.index for entry in DEFAULT_PALETTE] == list(range(25))

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#074BF3") == (7, 75, 243)
        assert hex_to_rgb("fe2500") == (254, 37, 0)

    @pytest.mark.parametrize("value", ["#FFF", "#GGGGGG", ""])
    def test_hex_to_rgb_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            hex_to_rgb(value)

    def test_entries_are_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_PALETTE[0].index = 3

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            Palette([])


class TestQuantizer:
    """Tests for nearest-color resolution."""

    @pytest.mark.parametrize("index", range(25))
    def test_every_palette_color_is_exact(self, index):
        quantizer = ColorQuantizer()
        match = quantizer.resolve(*DEFAULT_PALETTE[index].rgb)
        assert match.index == index
        assert match.exact is True

    def test_near_white(self):
        match = ColorQuantizer().resolve(250, 250, 250)
        assert match.index == 0
        assert match.exact is False

    def test_near_black(self):
        match = ColorQuantizer().resolve(1, 1, 1)
        assert match.index == 4
        assert match.exact is False

    def test_duplicate_entries_pick_lowest_index(self):
        quantizer = ColorQuantizer(Palette([(9, 9, 9), (5, 5, 5), (5, 5, 5)]))
        match = quantizer.resolve(5, 5, 5)
        assert match.index == 1
        assert match.exact is True

    def test_tie_keeps_earliest_index(self):
        quantizer = ColorQuantizer(Palette([(0, 0, 0), (2, 0, 0)]))
        match = quantizer.resolve(1, 0, 0)
        assert match.index == 0
        assert match.exact is False

    def test_later_closer_entry_wins(self):
        quantizer = ColorQuantizer(Palette([(0, 0, 0), (100, 100, 100), (120, 120, 120)]))
        match = quantizer.resolve(115, 115, 115)
        assert match.index == 2
        assert match.exact is False

    def test_accepts_numpy_scalars(self):
        import numpy as np

        r, g, b = np.array([254, 37, 0], dtype=np.uint8)
        match = ColorQuantizer().resolve(r, g, b)
        assert match.index == 11
        assert match.exact is True
