"""Unit tests for nesgfx.core.palettes."""

import pytest

from nesgfx.core.palettes import (
    GREYSCALE,
    GREYSCALE_TRANSPARENT,
    NES_COLORS,
    PALETTE_COUNT,
    PALETTE_NAMES,
    PRESET_PALETTES,
    TRANSPARENT,
    is_transparent,
    palette_name,
    resolve_palette,
)


class TestTables:
    """Fixed table shapes."""

    def test_reference_table_size(self):
        assert len(NES_COLORS) == 64

    def test_reference_entries_are_rgb(self):
        for color in NES_COLORS:
            assert len(color) == 3
            assert all(0 <= c <= 255 for c in color)

    def test_preset_count(self):
        assert len(PRESET_PALETTES) == 9

    def test_preset_indices_in_range(self):
        for preset in PRESET_PALETTES:
            assert len(preset) == 4
            assert all(0 <= i < 64 for i in preset)

    def test_palette_names(self):
        assert PALETTE_COUNT == 10
        assert PALETTE_NAMES[0] == "Greyscale"

    def test_transparent_never_matches_reference_color(self):
        assert TRANSPARENT not in NES_COLORS
        assert TRANSPARENT not in GREYSCALE


class TestResolvePalette:
    """Tests for resolve_palette()."""

    def test_greyscale_opaque(self):
        assert resolve_palette(0) == GREYSCALE

    def test_greyscale_transparent(self):
        palette = resolve_palette(0, transparent=True)
        assert palette == GREYSCALE_TRANSPARENT
        assert palette[0] == TRANSPARENT
        assert palette[1:] == GREYSCALE[1:]

    def test_preset_maps_through_reference_table(self):
        palette = resolve_palette(2)
        assert palette == (NES_COLORS[0x0F], NES_COLORS[0x02], NES_COLORS[0x12], NES_COLORS[0x22])

    def test_preset_transparent_slot0(self):
        palette = resolve_palette(3, transparent=True)
        assert is_transparent(palette[0])
        assert palette[1] == NES_COLORS[0x06]

    @pytest.mark.parametrize("index", range(10))
    def test_always_four_entries(self, index):
        assert len(resolve_palette(index)) == 4
        assert len(resolve_palette(index, transparent=True)) == 4

    @pytest.mark.parametrize("index", [-1, 10, 999])
    def test_out_of_range_falls_back_to_preset_1(self, index):
        assert resolve_palette(index, False) == resolve_palette(1, False)
        assert resolve_palette(index, True) == resolve_palette(1, True)

    def test_tables_unchanged_after_resolve(self):
        before = PRESET_PALETTES[0]
        palette = list(resolve_palette(1, transparent=True))
        palette[1] = (1, 2, 3)
        assert PRESET_PALETTES[0] == before
        assert resolve_palette(1)[1] == NES_COLORS[0x00]


class TestPaletteName:
    """palette_name() follows the same fallback rule."""

    def test_names(self):
        assert palette_name(0) == "Greyscale"
        assert palette_name(2) == "Blue"
        assert palette_name(9) == "Rainbow"

    def test_fallback(self):
        assert palette_name(-5) == palette_name(1)
        assert palette_name(42) == "Neutral"
