"""
Core NES functionality.

This package contains ROM header parsing, ROM reading, CHR tile decoding,
and palette definitions.
"""

from .chr_tile import Tile, decode_tile, extract_tiles
from .errors import (
    ArgumentError,
    FormatError,
    IncompleteDataError,
    NesGfxError,
    NotFoundError,
)
from .header import Mirroring, NesHeader, RomFormat
from .palettes import TRANSPARENT, resolve_palette
from .rom_reader import NesRom, is_nes_file, parse_rom, parse_rom_file

__all__ = [
    "Tile",
    "decode_tile",
    "extract_tiles",
    "NesGfxError",
    "FormatError",
    "IncompleteDataError",
    "ArgumentError",
    "NotFoundError",
    "Mirroring",
    "NesHeader",
    "RomFormat",
    "TRANSPARENT",
    "resolve_palette",
    "NesRom",
    "is_nes_file",
    "parse_rom",
    "parse_rom_file",
]
