"""
NES CHR Extractor - ROM Metadata

Builds the JSON metadata document describing a parsed ROM.
"""

import json
from pathlib import Path
from typing import Any

from ..core.rom_reader import NesRom


def rom_metadata(rom: NesRom) -> dict[str, Any]:
    """
    Describe a ROM as a JSON-ready dictionary.

    Keys are camelCase.
    """
    header = rom.header
    return {
        "fileName": rom.file_name,
        "filePath": rom.file_path,
        "format": str(header.format),
        "mapper": {
            "number": header.mapper_number,
            "name": header.mapper_name,
        },
        "prgRom": {
            "banks": header.prg_rom_size,
            "sizeBytes": header.prg_rom_size_bytes,
        },
        "chrRom": {
            "banks": header.chr_rom_size,
            "sizeBytes": header.chr_rom_size_bytes,
            "tileCount": rom.tile_count,
        },
        "mirroring": str(header.mirroring),
        "hasBatteryBackedRam": header.has_battery,
        "hasTrainer": header.has_trainer,
        "trainerSize": header.trainer_size_bytes,
        "totalFileSize": rom.total_file_size,
        "isValid": rom.is_valid,
    }


def export_metadata(rom: NesRom, path: str | Path) -> Path:
    """
    Write the metadata document for a ROM.

    Args:
        rom: Parsed ROM
        path: Output .json path (parent directories are created)

    Returns:
        Path that was written
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with open(out_path, "w") as f:
        json.dump(rom_metadata(rom), f, indent=2)
        f.write("\n")

    return out_path
