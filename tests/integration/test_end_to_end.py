"""
End-to-end pipeline: ROM bytes -> parse -> extract tiles -> palette -> sheet.
"""

import pytest

from nesgfx.core.chr_tile import extract_tiles
from nesgfx.core.palettes import resolve_palette
from nesgfx.core.rom_reader import parse_rom, parse_rom_file
from nesgfx.formats.rom_metadata import rom_metadata
from nesgfx.rendering.pil_renderer import compose_tile_sheet, sheet_size


def test_minimal_rom_pipeline(rom_file):
    """1 PRG bank, 1 CHR bank, no trainer -> 512 tiles."""
    rom = parse_rom_file(rom_file)

    assert rom.is_valid
    assert len(rom.prg_rom) == 16384
    assert len(rom.chr_rom) == 8192

    tiles = extract_tiles(rom.chr_rom)
    assert len(tiles) == 512

    sheet = compose_tile_sheet(tiles, palette=resolve_palette(1))
    assert sheet.size == sheet_size(512, 16, 2, 1)


def test_trainer_rom_pipeline(rom_builder):
    rom = parse_rom(rom_builder(prg_banks=2, chr_banks=1, trainer=True, chr_fill=0xFF))

    tiles = extract_tiles(rom.chr_rom)
    assert len(tiles) == 512
    assert all(tile.used_colors() == (3,) for tile in tiles)
    assert rom_metadata(rom)["totalFileSize"] == 16 + 512 + 32768 + 8192


@pytest.mark.parametrize("palette_index", [0, 1, 5, 9])
@pytest.mark.parametrize("transparent", [False, True])
def test_palette_choice_does_not_change_tiles(rom_builder, palette_index, transparent):
    """Decoding is independent of the palette picked for rendering."""
    rom = parse_rom(rom_builder(chr_fill=0x5A))
    before = [tile.pixels for tile in extract_tiles(rom.chr_rom)]

    compose_tile_sheet(
        extract_tiles(rom.chr_rom)[:16],
        palette=resolve_palette(palette_index, transparent),
        use_transparency=transparent,
    )

    assert [tile.pixels for tile in extract_tiles(rom.chr_rom)] == before
