#!/usr/bin/env python3
"""
NES CHR Extractor - Command Line Tool

Shows ROM information and exports CHR tiles as PNG images.
"""

import argparse
import json
import sys
import threading
from pathlib import Path

from nesgfx.core.chr_tile import extract_tiles
from nesgfx.core.errors import NesGfxError
from nesgfx.core.palettes import PALETTE_COUNT, palette_name
from nesgfx.core.rom_reader import is_nes_file, parse_rom_file
from nesgfx.formats.exporter import (
    DEFAULT_INDIVIDUAL_TILE_SCALE,
    ExportOptions,
    batch_export,
    export_tiles_individually,
    save_image,
)
from nesgfx.formats.rom_metadata import rom_metadata
from nesgfx.rendering.pil_renderer import (
    DEFAULT_SPACING,
    DEFAULT_TILE_SCALE,
    DEFAULT_TILES_PER_ROW,
    compose_tile_sheet,
)


def options_from_args(args) -> ExportOptions:
    return ExportOptions(
        palette_index=args.palette,
        transparent=args.transparent,
        tiles_per_row=args.per_row,
        sheet_scale=args.scale,
        spacing=args.spacing,
        tile_scale=args.tile_scale,
    )


def cmd_info(args):
    """Print ROM summary and metadata."""
    rom = parse_rom_file(args.rom)
    print(rom.summary())
    print(json.dumps(rom_metadata(rom), indent=2))


def cmd_sheet(args):
    """Render the full tile sheet for one ROM."""
    rom = parse_rom_file(args.rom)
    tiles = extract_tiles(rom.chr_rom)
    if not tiles:
        print(f"Error: {rom.file_name} has no CHR ROM data")
        sys.exit(1)

    options = options_from_args(args)
    img = compose_tile_sheet(
        tiles,
        tiles_per_row=options.tiles_per_row,
        scale=options.sheet_scale,
        spacing=options.spacing,
        palette=options.palette(),
        use_transparency=options.transparent,
    )

    output_path = args.output if args.output else f"{Path(args.rom).stem}_tiles.png"
    save_image(img, output_path)
    print(f"Saved: {output_path} ({img.width}x{img.height}, palette: {palette_name(args.palette)})")


def cmd_tiles(args):
    """Export every tile of one ROM as its own PNG."""
    rom = parse_rom_file(args.rom)
    tiles = extract_tiles(rom.chr_rom)
    if not tiles:
        print(f"Error: {rom.file_name} has no CHR ROM data")
        sys.exit(1)

    options = options_from_args(args)
    output_dir = args.output if args.output else f"{Path(args.rom).stem}_tiles"
    written = export_tiles_individually(
        tiles, output_dir, scale=options.tile_scale, palette=options.palette()
    )
    print(f"Saved {len(written)} tiles to {output_dir}")


def cmd_batch(args):
    """Export tiles, sheet and metadata for many ROMs."""
    rom_paths = []
    for name in args.roms:
        path = Path(name)
        if path.is_dir():
            rom_paths.extend(p for p in sorted(path.iterdir()) if is_nes_file(p))
        else:
            rom_paths.append(path)

    if not rom_paths:
        print("No NES files found")
        sys.exit(1)

    print(f"Exporting {len(rom_paths)} ROM(s) to {args.output}...")

    cancel = threading.Event()
    try:
        result = batch_export(rom_paths, args.output, options_from_args(args), cancel)
    except KeyboardInterrupt:
        cancel.set()
        print("Interrupted")
        sys.exit(130)

    print(f"Done: {len(result.exported)} exported, {len(result.failures)} failed")
    if result.failures:
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(
        description="Inspect NES ROMs and export CHR graphics as PNG images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Show header information:
    tools/extract.py info game.nes

  Render tile sheet with the blue preset:
    tools/extract.py sheet game.nes game_tiles.png -p 2

  Export individual tiles with transparent color 0:
    tools/extract.py tiles game.nes tiles/ -t

  Batch export a folder of ROMs:
    tools/extract.py batch exports/ roms/
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_opts = argparse.ArgumentParser(add_help=False)
    render_opts.add_argument(
        "-p",
        "--palette",
        type=int,
        choices=range(PALETTE_COUNT),
        default=0,
        help="Palette: 0 greyscale, 1-9 presets (default: 0)",
    )
    render_opts.add_argument(
        "-t",
        "--transparent",
        action="store_true",
        help="Treat color 0 as transparent",
    )
    render_opts.add_argument(
        "--per-row",
        type=int,
        default=DEFAULT_TILES_PER_ROW,
        help=f"Tiles per sheet row (default: {DEFAULT_TILES_PER_ROW})",
    )
    render_opts.add_argument(
        "--scale",
        type=int,
        default=DEFAULT_TILE_SCALE,
        help=f"Sheet pixel scale (default: {DEFAULT_TILE_SCALE})",
    )
    render_opts.add_argument(
        "--spacing",
        type=int,
        default=DEFAULT_SPACING,
        help=f"Gap between sheet tiles in pixels (default: {DEFAULT_SPACING})",
    )
    render_opts.add_argument(
        "--tile-scale",
        type=int,
        default=DEFAULT_INDIVIDUAL_TILE_SCALE,
        help=f"Pixel scale for individual tiles (default: {DEFAULT_INDIVIDUAL_TILE_SCALE})",
    )

    info = subparsers.add_parser("info", help="Print ROM header information")
    info.add_argument("rom", help="Path to .nes file")
    info.set_defaults(func=cmd_info)

    sheet = subparsers.add_parser("sheet", parents=[render_opts], help="Render tile sheet")
    sheet.add_argument("rom", help="Path to .nes file")
    sheet.add_argument("output", nargs="?", help="Output PNG file (optional)")
    sheet.set_defaults(func=cmd_sheet)

    tiles = subparsers.add_parser("tiles", parents=[render_opts], help="Export individual tiles")
    tiles.add_argument("rom", help="Path to .nes file")
    tiles.add_argument("output", nargs="?", help="Output directory (optional)")
    tiles.set_defaults(func=cmd_tiles)

    batch = subparsers.add_parser("batch", parents=[render_opts], help="Batch export ROMs")
    batch.add_argument("output", help="Output directory")
    batch.add_argument("roms", nargs="+", help=".nes files or directories of them")
    batch.set_defaults(func=cmd_batch)

    args = parser.parse_args()

    if getattr(args, "per_row", 1) < 1 or getattr(args, "scale", 1) < 1:
        print("Error: --per-row and --scale must be at least 1")
        sys.exit(1)

    try:
        args.func(args)
    except NesGfxError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
