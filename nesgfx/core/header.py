"""
NES CHR Extractor - ROM Header

The 16-byte iNES / NES 2.0 header. Raw bytes are stored as-is and every
derived value (mapper, mirroring, sizes) is computed on access.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import ArgumentError
from .rom_utils import (
    FLAG6_BATTERY,
    FLAG6_FOUR_SCREEN,
    FLAG6_MAPPER_LOW_SHIFT,
    FLAG6_TRAINER,
    FLAG6_VERTICAL_MIRRORING,
    FLAG7_MAPPER_HIGH,
    FLAG7_NES2_MASK,
    FLAG7_NES2_SHIFT,
    FLAG7_NES2_VALUE,
    INES_HEADER_SIZE,
    INES_MAGIC,
    MAGIC_SIZE,
    PADDING_SIZE,
    TRAINER_SIZE,
    chr_banks_to_bytes,
    mapper_name,
    prg_banks_to_bytes,
)


class Mirroring(Enum):
    """Nametable mirroring arrangement."""

    HORIZONTAL = "Horizontal"
    VERTICAL = "Vertical"
    FOUR_SCREEN = "FourScreen"

    def __str__(self) -> str:
        return self.value


class RomFormat(Enum):
    """Container revision."""

    INES = "iNES"
    NES20 = "NES2.0"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NesHeader:
    """
    Raw iNES header fields.

    Byte layout:
        0-3   magic ("NES" + 0x1A)
        4     PRG ROM size in 16KB units
        5     CHR ROM size in 8KB units
        6     flags 6 (mirroring, battery, trainer, four-screen, mapper low)
        7     flags 7 (VS/PlayChoice, NES 2.0 id, mapper high)
        8-10  flags 8-10
        11-15 padding
    """

    magic: bytes = INES_MAGIC
    prg_rom_size: int = 0
    chr_rom_size: int = 0
    flags6: int = 0
    flags7: int = 0
    flags8: int = 0
    flags9: int = 0
    flags10: int = 0
    padding: bytes = bytes(PADDING_SIZE)

    @classmethod
    def from_bytes(cls, data: bytes) -> "NesHeader":
        """
        Build a header from the first 16 bytes of a ROM image.

        Args:
            data: At least 16 bytes (extra bytes are ignored)

        Returns:
            NesHeader with the raw fields filled in

        Raises:
            ArgumentError: If fewer than 16 bytes are supplied
        """
        if data is None or len(data) < INES_HEADER_SIZE:
            raise ArgumentError(f"Header requires {INES_HEADER_SIZE} bytes")

        return cls(
            magic=bytes(data[0:MAGIC_SIZE]),
            prg_rom_size=data[4],
            chr_rom_size=data[5],
            flags6=data[6],
            flags7=data[7],
            flags8=data[8],
            flags9=data[9],
            flags10=data[10],
            padding=bytes(data[11:INES_HEADER_SIZE]),
        )

    def to_bytes(self) -> bytes:
        """Serialize back to the 16-byte on-disk form."""
        return (
            bytes(self.magic)
            + bytes(
                [
                    self.prg_rom_size,
                    self.chr_rom_size,
                    self.flags6,
                    self.flags7,
                    self.flags8,
                    self.flags9,
                    self.flags10,
                ]
            )
            + bytes(self.padding)
        )

    def is_valid(self) -> bool:
        """True if the magic number is "NES" followed by 0x1A."""
        return bytes(self.magic) == INES_MAGIC

    @property
    def mapper_number(self) -> int:
        return (self.flags7 & FLAG7_MAPPER_HIGH) | (self.flags6 >> FLAG6_MAPPER_LOW_SHIFT)

    @property
    def mapper_name(self) -> str:
        return mapper_name(self.mapper_number)

    @property
    def mirroring(self) -> Mirroring:
        # Four-screen overrides the H/V bit
        if self.flags6 & FLAG6_FOUR_SCREEN:
            return Mirroring.FOUR_SCREEN
        if self.flags6 & FLAG6_VERTICAL_MIRRORING:
            return Mirroring.VERTICAL
        return Mirroring.HORIZONTAL

    @property
    def has_battery(self) -> bool:
        return bool(self.flags6 & FLAG6_BATTERY)

    @property
    def has_trainer(self) -> bool:
        return bool(self.flags6 & FLAG6_TRAINER)

    @property
    def format(self) -> RomFormat:
        nes2_bits = (self.flags7 >> FLAG7_NES2_SHIFT) & FLAG7_NES2_MASK
        return RomFormat.NES20 if nes2_bits == FLAG7_NES2_VALUE else RomFormat.INES

    @property
    def prg_rom_size_bytes(self) -> int:
        return prg_banks_to_bytes(self.prg_rom_size)

    @property
    def chr_rom_size_bytes(self) -> int:
        return chr_banks_to_bytes(self.chr_rom_size)

    @property
    def trainer_size_bytes(self) -> int:
        return TRAINER_SIZE if self.has_trainer else 0
