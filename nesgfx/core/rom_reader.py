"""
NES CHR Extractor - ROM Reader

Parses iNES / NES 2.0 ROM images into a header plus raw trainer, PRG and
CHR segments. Also provides a cheap "does this look like a ROM" check.
"""

import io
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .chr_tile import BYTES_PER_TILE
from .errors import ArgumentError, FormatError, IncompleteDataError, NotFoundError
from .header import NesHeader
from .rom_utils import INES_HEADER_SIZE, INES_MAGIC, MAGIC_SIZE, NES_FILE_EXTENSION, TRAINER_SIZE

RomSource = BinaryIO | bytes | bytearray | memoryview


@dataclass(frozen=True)
class NesRom:
    """
    A parsed ROM image.

    Holds the header and the raw segment bytes exactly as they appear in the
    file. Nothing here is derived from segment contents.
    """

    header: NesHeader
    prg_rom: bytes = b""
    chr_rom: bytes = b""
    trainer: bytes | None = None
    file_path: str | None = None

    @property
    def file_name(self) -> str:
        if self.file_path is None:
            return "Unknown"
        return os.path.basename(self.file_path)

    @property
    def total_file_size(self) -> int:
        return (
            INES_HEADER_SIZE
            + self.header.trainer_size_bytes
            + len(self.prg_rom)
            + len(self.chr_rom)
        )

    @property
    def is_valid(self) -> bool:
        return self.header.is_valid()

    @property
    def prg_rom_bank_count(self) -> int:
        return self.header.prg_rom_size

    @property
    def chr_rom_bank_count(self) -> int:
        return self.header.chr_rom_size

    @property
    def tile_count(self) -> int:
        return len(self.chr_rom) // BYTES_PER_TILE

    @property
    def has_chr_rom(self) -> bool:
        """False for CHR RAM boards, which ship no tile data in the file."""
        return len(self.chr_rom) > 0

    def summary(self) -> str:
        """One-line description used by the CLI."""
        header = self.header
        return (
            f"{self.file_name} - Mapper: {header.mapper_number} ({header.mapper_name}), "
            f"PRG: {header.prg_rom_size}x16KB, CHR: {header.chr_rom_size}x8KB, "
            f"Mirroring: {header.mirroring}"
        )

    def __str__(self) -> str:
        return self.summary()


def _read_exact(stream: BinaryIO, size: int, segment: str) -> bytes:
    """Read exactly `size` bytes or raise IncompleteDataError."""
    if size == 0:
        return b""

    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    data = b"".join(chunks)
    if len(data) != size:
        raise IncompleteDataError(segment, size, len(data))
    return data


def parse_rom(source: RomSource, file_path: str | None = None) -> NesRom:
    """
    Parse a ROM image from a binary stream or an in-memory buffer.

    Args:
        source: Readable binary stream, or bytes-like ROM contents
        file_path: Display path recorded on the result (metadata only)

    Returns:
        Fully populated NesRom

    Raises:
        ArgumentError: If source is None
        IncompleteDataError: If the header or a segment is shorter than declared
        FormatError: If the magic number does not match
    """
    if source is None:
        raise ArgumentError("ROM source cannot be None")

    if isinstance(source, (bytes, bytearray, memoryview)):
        stream: BinaryIO = io.BytesIO(bytes(source))
    else:
        stream = source

    header_bytes = _read_exact(stream, INES_HEADER_SIZE, "header")
    header = NesHeader.from_bytes(header_bytes)

    if not header.is_valid():
        raise FormatError("Invalid NES file format. Magic number mismatch.")

    trainer = None
    if header.has_trainer:
        trainer = _read_exact(stream, TRAINER_SIZE, "trainer")

    prg_rom = _read_exact(stream, header.prg_rom_size_bytes, "PRG ROM")
    chr_rom = _read_exact(stream, header.chr_rom_size_bytes, "CHR ROM")

    return NesRom(
        header=header,
        prg_rom=prg_rom,
        chr_rom=chr_rom,
        trainer=trainer,
        file_path=file_path,
    )


def parse_rom_file(rom_path: str | Path) -> NesRom:
    """
    Load and parse a ROM file from disk.

    Args:
        rom_path: Path to iNES ROM file

    Returns:
        Parsed NesRom with file_path set

    Raises:
        ArgumentError: If the path is empty
        NotFoundError: If the file does not exist
        FormatError, IncompleteDataError: As for parse_rom
    """
    if rom_path is None or not str(rom_path).strip():
        raise ArgumentError("ROM path cannot be empty")

    path = Path(rom_path)
    if not path.is_file():
        raise NotFoundError(f"NES file not found: {rom_path}")

    with open(path, "rb") as f:
        return parse_rom(f, str(rom_path))


def is_nes_file(rom_path: str | Path | None) -> bool:
    """
    Check whether a file looks like an NES ROM by extension and magic number.

    Never raises; every failure (missing file, short file, wrong magic,
    unreadable path) returns False.
    """
    try:
        if rom_path is None or not str(rom_path).strip():
            return False

        path = Path(rom_path)
        if path.suffix.lower() != NES_FILE_EXTENSION or not path.is_file():
            return False

        with open(path, "rb") as f:
            head = f.read(INES_HEADER_SIZE)

        if len(head) < INES_HEADER_SIZE:
            return False
        return head[:MAGIC_SIZE] == INES_MAGIC
    except (OSError, ValueError):
        return False
