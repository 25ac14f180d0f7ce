"""
NES CHR Extractor - PIL Renderer

PIL-based rendering of decoded CHR tiles: single tiles and full tile sheets.
Returns in-memory images only; saving is done by the exporter.
"""

import math
from collections.abc import Sequence

try:
    from PIL import Image, ImageDraw
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.chr_tile import TILE_SIZE, Tile
from ..core.errors import ArgumentError
from ..core.palettes import GREYSCALE, TRANSPARENT, Palette, PaletteEntry

# Sheet layout defaults
DEFAULT_TILES_PER_ROW = 16
DEFAULT_TILE_SCALE = 2
DEFAULT_SPACING = 1

# Fixed UI colors (independent of the chosen palette)
BACKGROUND_COLOR = (32, 32, 32, 255)
BORDER_COLOR = (64, 64, 64, 255)
CHECKER_LIGHT = (128, 128, 128, 255)
CHECKER_DARK = (96, 96, 96, 255)
MIN_CHECKER_SIZE = 2

CLEAR = (0, 0, 0, 0)


def _rgba(color: PaletteEntry) -> tuple[int, int, int, int]:
    if len(color) == 4:
        return tuple(color)
    return (color[0], color[1], color[2], 255)


def _draw_tile_pixels(pixels, tile: Tile, palette: Palette, base_x: int, base_y: int, scale: int):
    """Paint a tile's pixels; entries equal to TRANSPARENT are left untouched."""
    for py in range(TILE_SIZE):
        for px in range(TILE_SIZE):
            color = palette[tile.pixels[py][px]]
            if color == TRANSPARENT:
                continue

            color = _rgba(color)
            # Apply scaling by filling scale x scale region
            if scale == 1:
                pixels[base_x + px, base_y + py] = color
            else:
                for sy in range(scale):
                    for sx in range(scale):
                        pixels[base_x + px * scale + sx, base_y + py * scale + sy] = color


def _draw_checkerboard(pixels, base_x: int, base_y: int, size: int, scale: int):
    """Gray checkerboard under a tile, like an image editor's transparency grid."""
    check = max(scale, MIN_CHECKER_SIZE)
    for cy in range(size):
        for cx in range(size):
            light = ((cx // check) + (cy // check)) % 2 == 0
            pixels[base_x + cx, base_y + cy] = CHECKER_LIGHT if light else CHECKER_DARK


def _validate_palette(palette: Palette | None) -> Palette:
    if palette is None:
        return GREYSCALE
    if len(palette) != 4:
        raise ArgumentError(f"Palette must have exactly 4 entries, got {len(palette)}")
    return tuple(palette)


def sheet_size(tile_count: int, tiles_per_row: int, scale: int, spacing: int) -> tuple[int, int]:
    """
    Pixel dimensions of a tile sheet.

    Args:
        tile_count: Number of tiles on the sheet
        tiles_per_row: Grid columns
        scale: Pixel multiplier per source pixel
        spacing: Gap between tiles in output pixels

    Returns:
        (width, height)
    """
    scaled_size = TILE_SIZE * scale
    rows = math.ceil(tile_count / tiles_per_row)
    width = tiles_per_row * (scaled_size + spacing) - spacing
    height = rows * (scaled_size + spacing) - spacing
    return width, height


def render_tile_to_image(
    tile: Tile,
    palette: Palette | None = None,
    scale: int = 1,
) -> Image.Image:
    """
    Render a single tile to a PIL RGBA image.

    The background is palette color 0, or fully transparent when color 0 is
    the TRANSPARENT marker.

    Args:
        tile: Decoded tile
        palette: 4-entry resolved palette (default: opaque greyscale)
        scale: Pixel scale factor (default: 1)

    Returns:
        PIL Image of (8*scale) x (8*scale) pixels
    """
    if scale < 1:
        raise ArgumentError("Scale must be at least 1")
    palette = _validate_palette(palette)

    size = TILE_SIZE * scale
    background = CLEAR if palette[0] == TRANSPARENT else _rgba(palette[0])
    img = Image.new("RGBA", (size, size), background)
    pixels = img.load()
    assert pixels is not None

    _draw_tile_pixels(pixels, tile, palette, 0, 0, scale)
    return img


def compose_tile_sheet(
    tiles: Sequence[Tile],
    tiles_per_row: int = DEFAULT_TILES_PER_ROW,
    scale: int = DEFAULT_TILE_SCALE,
    spacing: int = DEFAULT_SPACING,
    palette: Palette | None = None,
    use_transparency: bool = False,
) -> Image.Image:
    """
    Lay out tiles in a grid on a single image.

    Args:
        tiles: Tiles in display order
        tiles_per_row: Grid columns (>= 1)
        scale: Pixel multiplier per source pixel (>= 1)
        spacing: Gap between tiles (>= 0); when > 0 a 1px border is drawn
            in the gap around each tile (not along the sheet's outer edge)
        palette: 4-entry resolved palette (default: opaque greyscale)
        use_transparency: Draw a checkerboard under tiles whose color 0 is
            the TRANSPARENT marker. Transparent pixels are never painted,
            whatever this flag says.

    Returns:
        PIL RGBA Image

    Raises:
        ArgumentError: If tiles is empty or a layout parameter is out of range
    """
    if not tiles:
        raise ArgumentError("Tiles list cannot be empty")
    if tiles_per_row < 1:
        raise ArgumentError("tiles_per_row must be at least 1")
    if scale < 1:
        raise ArgumentError("Scale must be at least 1")
    if spacing < 0:
        raise ArgumentError("Spacing cannot be negative")
    palette = _validate_palette(palette)

    scaled_size = TILE_SIZE * scale
    step = scaled_size + spacing
    width, height = sheet_size(len(tiles), tiles_per_row, scale, spacing)

    img = Image.new("RGBA", (width, height), BACKGROUND_COLOR)
    pixels = img.load()
    assert pixels is not None
    draw = ImageDraw.Draw(img)

    checkerboard = use_transparency and palette[0] == TRANSPARENT

    for i, tile in enumerate(tiles):
        base_x = (i % tiles_per_row) * step
        base_y = (i // tiles_per_row) * step

        if checkerboard:
            _draw_checkerboard(pixels, base_x, base_y, scaled_size, scale)

        _draw_tile_pixels(pixels, tile, palette, base_x, base_y, scale)

        # Outline sits in the gutter, just outside the tile footprint. Sides on
        # the sheet's outer edge fall off the image, so the grid only shows
        # between tiles and tile pixels are never covered.
        if spacing > 0:
            draw.rectangle(
                (base_x - 1, base_y - 1, base_x + scaled_size, base_y + scaled_size),
                outline=BORDER_COLOR,
            )

    return img
