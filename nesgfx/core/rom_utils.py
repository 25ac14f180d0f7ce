"""
iNES / NES 2.0 container constants.

This module provides:
- Header layout constants (magic, header size, padding size)
- Segment unit sizes (PRG banks, CHR banks, trainer)
- Flag 6 / flag 7 bit masks
- Known mapper names

Used by NesHeader, the ROM reader and the metadata exporter.
"""

# ============================================================================
# Header Layout
# ============================================================================
INES_MAGIC = b"NES\x1a"
INES_HEADER_SIZE = 0x10
MAGIC_SIZE = 4
PADDING_SIZE = 5
NES_FILE_EXTENSION = ".nes"

# ============================================================================
# Segment Sizes
# ============================================================================
PRG_BANK_SIZE = 0x4000  # 16KB units
CHR_BANK_SIZE = 0x2000  # 8KB units
TRAINER_SIZE = 0x200  # 512 bytes

# ============================================================================
# Flag Bits
# ============================================================================
FLAG6_VERTICAL_MIRRORING = 0x01  # Bit 0
FLAG6_BATTERY = 0x02  # Bit 1
FLAG6_TRAINER = 0x04  # Bit 2
FLAG6_FOUR_SCREEN = 0x08  # Bit 3
FLAG6_MAPPER_LOW_SHIFT = 4  # Bits 4-7 hold the low mapper nibble

FLAG7_MAPPER_HIGH = 0xF0  # Bits 4-7
FLAG7_NES2_SHIFT = 2
FLAG7_NES2_MASK = 0b11
FLAG7_NES2_VALUE = 0b10

# ============================================================================
# Mappers
# ============================================================================
MAPPER_NAMES = {
    0: "NROM",
    1: "MMC1",
    2: "UxROM",
    3: "CNROM",
    4: "MMC3",
    5: "MMC5",
    7: "AxROM",
    9: "MMC2",
    10: "MMC4",
    11: "Color Dreams",
}


def mapper_name(mapper_number: int) -> str:
    """
    Look up a human-readable mapper name.

    Args:
        mapper_number: iNES mapper number

    Returns:
        Board name, or "Unknown (#N)" for unlisted mappers
    """
    return MAPPER_NAMES.get(mapper_number, f"Unknown (#{mapper_number})")


def prg_banks_to_bytes(banks: int) -> int:
    """Convert a PRG bank count (16KB units) to bytes."""
    return banks * PRG_BANK_SIZE


def chr_banks_to_bytes(banks: int) -> int:
    """Convert a CHR bank count (8KB units) to bytes."""
    return banks * CHR_BANK_SIZE
