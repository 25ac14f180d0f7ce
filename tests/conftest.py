"""Shared pytest fixtures for ROM parsing, tile decoding and export tests."""

import pytest

from nesgfx.core.rom_utils import CHR_BANK_SIZE, PRG_BANK_SIZE, TRAINER_SIZE


def build_rom(
    prg_banks: int = 1,
    chr_banks: int = 1,
    flags6: int = 0,
    flags7: int = 0,
    magic: bytes = b"NES\x1a",
    trainer: bool = False,
    chr_fill: int = 0x00,
    truncate: int = 0,
) -> bytes:
    """
    Build a synthetic iNES image.

    Args:
        prg_banks: PRG ROM size in 16KB units
        chr_banks: CHR ROM size in 8KB units
        flags6: Header byte 6 (trainer bit is set automatically when trainer=True)
        flags7: Header byte 7
        magic: First 4 bytes
        trainer: Include a 512-byte trainer
        chr_fill: Byte value used to fill CHR ROM
        truncate: Number of bytes to cut from the end
    """
    if trainer:
        flags6 |= 0x04

    header = magic + bytes([prg_banks, chr_banks, flags6, flags7, 0, 0, 0]) + bytes(5)
    data = header
    if trainer:
        data += bytes([0xEE]) * TRAINER_SIZE
    data += bytes(range(256)) * (prg_banks * PRG_BANK_SIZE // 256)
    data += bytes([chr_fill]) * (chr_banks * CHR_BANK_SIZE)

    if truncate:
        data = data[:-truncate]
    return data


@pytest.fixture
def rom_bytes():
    """Minimal valid NROM image: 1 PRG bank, 1 CHR bank, no trainer."""
    return build_rom()


@pytest.fixture
def rom_file(tmp_path, rom_bytes):
    """rom_bytes written to a .nes file."""
    path = tmp_path / "test_rom.nes"
    path.write_bytes(rom_bytes)
    return path


@pytest.fixture
def make_rom_file(tmp_path):
    """Factory writing build_rom() output to tmp_path/<name>."""

    def _make(name: str = "game.nes", **kwargs):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_rom(**kwargs))
        return path

    return _make


@pytest.fixture
def checker_tile_bytes():
    """One tile whose rows alternate low=0xAA / high=0x55 (pixels 1,2,1,2...)."""
    return bytes([0xAA] * 8 + [0x55] * 8)


@pytest.fixture
def rom_builder():
    """Expose build_rom to tests."""
    return build_rom
