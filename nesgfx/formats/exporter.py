"""
NES CHR Extractor - Image Export and Batch Processing

Writes tile sheets and individual tiles as PNG files, and runs the full
parse -> decode -> render -> save pipeline over many ROMs.
"""

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from ..core.chr_tile import Tile, extract_tiles
from ..core.errors import NesGfxError
from ..core.palettes import Palette, resolve_palette
from ..core.rom_reader import NesRom, parse_rom_file
from ..rendering.pil_renderer import (
    DEFAULT_SPACING,
    DEFAULT_TILE_SCALE,
    DEFAULT_TILES_PER_ROW,
    compose_tile_sheet,
    render_tile_to_image,
)
from .rom_metadata import export_metadata

DEFAULT_INDIVIDUAL_TILE_SCALE = 4

PathLike = str | Path
ProgressCallback = Callable[[int, int, Path], None]


@dataclass
class ExportOptions:
    """Rendering parameters shared by single-ROM and batch export."""

    palette_index: int = 0
    transparent: bool = False
    tiles_per_row: int = DEFAULT_TILES_PER_ROW
    sheet_scale: int = DEFAULT_TILE_SCALE
    spacing: int = DEFAULT_SPACING
    tile_scale: int = DEFAULT_INDIVIDUAL_TILE_SCALE

    def palette(self) -> Palette:
        return resolve_palette(self.palette_index, self.transparent)


@dataclass
class RomExportResult:
    """Files written for one ROM."""

    rom_path: Path
    directory: Path
    tile_files: list[Path] = field(default_factory=list)
    sheet_file: Path | None = None
    metadata_file: Path | None = None


@dataclass
class BatchResult:
    """Outcome of a batch export: per-ROM successes, failures and skips."""

    exported: list[RomExportResult] = field(default_factory=list)
    failures: list[tuple[Path, str]] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures and not self.cancelled


def save_image(image: Image.Image, path: PathLike) -> Path:
    """
    Save an image as PNG.

    Args:
        image: PIL image to write
        path: Output path (parent directories are created)

    Returns:
        Path that was written
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(out_path, format="PNG")
    return out_path


def export_tiles_individually(
    tiles: Sequence[Tile],
    directory: PathLike,
    prefix: str = "tile",
    scale: int = DEFAULT_INDIVIDUAL_TILE_SCALE,
    palette: Palette | None = None,
    digits: int = 4,
) -> list[Path]:
    """
    Export each tile to its own PNG file.

    Files are named "{prefix}_{i}.png" with i zero-padded to `digits`.

    Returns:
        Paths written, in tile order
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for i, tile in enumerate(tiles):
        img = render_tile_to_image(tile, palette, scale)
        written.append(save_image(img, out_dir / f"{prefix}_{i:0{digits}d}.png"))
    return written


def export_rom(
    rom: NesRom,
    output_dir: PathLike,
    options: ExportOptions | None = None,
    directory_name: str | None = None,
) -> RomExportResult:
    """
    Export everything for one ROM into "<output_dir>/<rom stem>/".

    The directory receives one PNG per tile, the full tile sheet (only when
    the ROM carries CHR data) and the metadata JSON. Files are always named
    after the ROM stem; directory_name only overrides the folder name.
    """
    options = options or ExportOptions()
    stem = Path(rom.file_name).stem
    rom_dir = Path(output_dir) / (directory_name or stem)
    rom_dir.mkdir(parents=True, exist_ok=True)

    result = RomExportResult(rom_path=Path(rom.file_path or rom.file_name), directory=rom_dir)

    palette = options.palette()
    tiles = extract_tiles(rom.chr_rom)
    result.tile_files = export_tiles_individually(
        tiles, rom_dir, prefix=stem, scale=options.tile_scale, palette=palette, digits=3
    )

    if tiles:
        sheet = compose_tile_sheet(
            tiles,
            tiles_per_row=options.tiles_per_row,
            scale=options.sheet_scale,
            spacing=options.spacing,
            palette=palette,
            use_transparency=options.transparent,
        )
        result.sheet_file = save_image(sheet, rom_dir / f"{stem}_sheet.png")
    else:
        print(f"Warning: {rom.file_name} has no CHR ROM (CHR RAM board), skipping tile sheet")

    result.metadata_file = export_metadata(rom, rom_dir / f"{stem}.json")
    return result


def _unique_directory_name(stem: str, used: set[str]) -> str:
    """Return stem, or stem_2, stem_3, ... if already taken (case-insensitive)."""
    name = stem
    n = 2
    while name.lower() in used:
        name = f"{stem}_{n}"
        n += 1
    used.add(name.lower())
    return name


def batch_export(
    rom_paths: Sequence[PathLike],
    output_dir: PathLike,
    options: ExportOptions | None = None,
    cancel_event: threading.Event | None = None,
    on_progress: ProgressCallback | None = None,
) -> BatchResult:
    """
    Export many ROMs, one subdirectory each.

    A failure in one ROM is recorded against that file and processing moves
    on. Cancellation is checked between ROMs; ROMs not yet started are
    listed in BatchResult.skipped. ROMs sharing a file stem (e.g. game.nes
    from two folders) get distinct directories: game, game_2, ...

    Args:
        rom_paths: ROM files to process
        output_dir: Root output directory
        options: Rendering parameters (default: ExportOptions())
        cancel_event: Set to stop before the next ROM
        on_progress: Called as on_progress(done, total, path) after each ROM

    Returns:
        BatchResult
    """
    options = options or ExportOptions()
    paths = [Path(p) for p in rom_paths]
    result = BatchResult()
    total = len(paths)
    used_names: set[str] = set()

    for i, rom_path in enumerate(paths):
        if cancel_event is not None and cancel_event.is_set():
            result.cancelled = True
            result.skipped.extend(paths[i:])
            print(f"Batch export cancelled, {total - i} file(s) skipped")
            break

        try:
            rom = parse_rom_file(rom_path)
            name = _unique_directory_name(Path(rom.file_name).stem, used_names)
            exported = export_rom(rom, output_dir, options, directory_name=name)
            result.exported.append(exported)
            print(f"Exported: {rom_path} -> {exported.directory}")
        except (NesGfxError, OSError) as e:
            result.failures.append((rom_path, str(e)))
            print(f"Error: {rom_path}: {e}")

        if on_progress is not None:
            on_progress(i + 1, total, rom_path)

    return result


def start_batch_export(
    rom_paths: Sequence[PathLike],
    output_dir: PathLike,
    options: ExportOptions | None = None,
    cancel_event: threading.Event | None = None,
    on_progress: ProgressCallback | None = None,
    on_complete: Callable[[BatchResult | None], None] | None = None,
) -> threading.Thread:
    """
    Run batch_export on a background thread.

    The caller keeps control and may set cancel_event at any time; the
    result is delivered to on_complete from the worker thread. on_complete
    is always called: with None if the batch aborted on an unexpected
    exception, which then propagates in the worker thread.

    Returns:
        The started worker thread
    """

    def _worker():
        result = None
        try:
            result = batch_export(rom_paths, output_dir, options, cancel_event, on_progress)
        finally:
            if on_complete is not None:
                on_complete(result)

    thread = threading.Thread(target=_worker, name="batch-export", daemon=True)
    thread.start()
    return thread
