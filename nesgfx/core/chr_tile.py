"""
NES CHR Extractor - CHR Tile Decoding

Decodes the 2-bitplane NES CHR format into 8x8 grids of 2-bit pixel values.
The decoder knows nothing about colors; palettes are applied at render time.
"""

from dataclasses import dataclass

from .errors import ArgumentError

# CHR format constants
TILE_SIZE = 8  # 8x8 pixels per tile
BYTES_PER_TILE = 16  # 16 bytes per tile (8 bytes per bitplane)
PLANE_SIZE = 8

PixelRows = tuple[tuple[int, ...], ...]


@dataclass(frozen=True)
class Tile:
    """A decoded CHR tile."""

    index: int
    raw: bytes
    pixels: PixelRows

    def pixel(self, x: int, y: int) -> int:
        """Pixel value (0-3) at column x, row y."""
        return self.pixels[y][x]

    def used_colors(self) -> tuple[int, ...]:
        """Sorted distinct pixel values present in the tile."""
        return tuple(sorted({value for row in self.pixels for value in row}))

    def is_empty(self) -> bool:
        """True if every pixel is color 0."""
        return all(value == 0 for row in self.pixels for value in row)


def decode_pixels(tile_data: bytes) -> PixelRows:
    """
    Decode the first 16 bytes of tile_data into 8 rows of 8 pixel values.

    Each tile is 16 bytes: 8 bytes for plane 0 (low bit), 8 bytes for
    plane 1 (high bit). Bit 7 of each byte is the leftmost pixel.
    """
    plane0 = tile_data[0:PLANE_SIZE]  # Low bit plane
    plane1 = tile_data[PLANE_SIZE:BYTES_PER_TILE]  # High bit plane

    rows = []
    for row in range(TILE_SIZE):
        row_pixels = []
        for col in range(TILE_SIZE):
            shift = 7 - col
            low_bit = (plane0[row] >> shift) & 1
            high_bit = (plane1[row] >> shift) & 1
            row_pixels.append((high_bit << 1) | low_bit)
        rows.append(tuple(row_pixels))

    return tuple(rows)


def decode_tile(tile_data: bytes, index: int = 0) -> Tile:
    """
    Decode a single 8x8 NES CHR tile.

    Args:
        tile_data: At least 16 bytes; anything past the first 16 is ignored
        index: Tile index to record on the result

    Returns:
        Tile with raw bytes and decoded pixel rows

    Raises:
        ArgumentError: If tile_data is None or shorter than 16 bytes
    """
    if tile_data is None or len(tile_data) < BYTES_PER_TILE:
        raise ArgumentError(f"Tile data must be at least {BYTES_PER_TILE} bytes")

    raw = bytes(tile_data[:BYTES_PER_TILE])
    return Tile(index=index, raw=raw, pixels=decode_pixels(raw))


def extract_tiles(chr_data: bytes | None) -> list[Tile]:
    """
    Split a CHR buffer into consecutive 16-byte tiles.

    A trailing remainder shorter than 16 bytes is dropped. None or an empty
    buffer gives an empty list.
    """
    if not chr_data:
        return []

    tile_count = len(chr_data) // BYTES_PER_TILE
    return [
        decode_tile(chr_data[i * BYTES_PER_TILE : (i + 1) * BYTES_PER_TILE], i)
        for i in range(tile_count)
    ]
