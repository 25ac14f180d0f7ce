"""
NES CHR Extractor - Color Palettes

Reference NES colors and the visualization presets used to render CHR tiles.

Palettes are NOT stored in .nes files. CHR data only holds 2-bit color
indices, so every color shown by this tool comes from the tables below
(the same approach as YY-CHR style viewers).
"""


# Type alias for RGB color
RGBColor = tuple[int, int, int]
RGBAColor = tuple[int, int, int, int]
PaletteEntry = RGBColor | RGBAColor
Palette = tuple[PaletteEntry, ...]

# Marker for "do not draw this slot". Four components, so it never equals an RGB entry.
TRANSPARENT: RGBAColor = (0, 0, 0, 0)

TILE_PALETTE_SIZE = 4  # background + 3 colors

# 2C02 PPU reference palette (64 entries)
NES_COLORS: tuple[RGBColor, ...] = (
    # 0x00-0x0F
    (84, 84, 84),
    (0, 30, 116),
    (8, 16, 144),
    (48, 0, 136),
    (68, 0, 100),
    (92, 0, 48),
    (84, 4, 0),
    (60, 24, 0),
    (32, 42, 0),
    (8, 58, 0),
    (0, 64, 0),
    (0, 60, 0),
    (0, 50, 60),
    (0, 0, 0),
    (0, 0, 0),
    (0, 0, 0),
    # 0x10-0x1F
    (152, 150, 152),
    (8, 76, 196),
    (48, 50, 236),
    (92, 30, 228),
    (136, 20, 176),
    (160, 20, 100),
    (152, 34, 32),
    (120, 60, 0),
    (84, 90, 0),
    (40, 114, 0),
    (8, 124, 0),
    (0, 118, 40),
    (0, 102, 120),
    (0, 0, 0),
    (0, 0, 0),
    (0, 0, 0),
    # 0x20-0x2F
    (236, 238, 236),
    (76, 154, 236),
    (120, 124, 236),
    (176, 98, 236),
    (228, 84, 236),
    (236, 88, 180),
    (236, 106, 100),
    (212, 136, 32),
    (160, 170, 0),
    (116, 196, 0),
    (76, 208, 32),
    (56, 204, 108),
    (56, 180, 204),
    (60, 60, 60),
    (0, 0, 0),
    (0, 0, 0),
    # 0x30-0x3F
    (236, 238, 236),
    (168, 204, 236),
    (188, 188, 236),
    (212, 178, 236),
    (236, 174, 236),
    (236, 174, 212),
    (236, 180, 176),
    (228, 196, 144),
    (204, 210, 120),
    (180, 222, 120),
    (168, 226, 144),
    (152, 226, 180),
    (160, 214, 228),
    (160, 162, 160),
    (0, 0, 0),
    (0, 0, 0),
)

# Greyscale palette (palette 0, the default)
GREYSCALE: Palette = (
    (0, 0, 0),
    (85, 85, 85),
    (170, 170, 170),
    (255, 255, 255),
)

# Greyscale with color 0 transparent (sprite style)
GREYSCALE_TRANSPARENT: Palette = (TRANSPARENT,) + GREYSCALE[1:]

# Preset palettes 1-9 as indices into NES_COLORS
PRESET_PALETTES: tuple[tuple[int, int, int, int], ...] = (
    (0x0F, 0x00, 0x10, 0x30),  # 1: Neutral
    (0x0F, 0x02, 0x12, 0x22),  # 2: Blue
    (0x0F, 0x06, 0x16, 0x26),  # 3: Red
    (0x0F, 0x0A, 0x1A, 0x2A),  # 4: Green
    (0x0F, 0x18, 0x28, 0x38),  # 5: Yellow
    (0x0F, 0x03, 0x13, 0x23),  # 6: Purple
    (0x0F, 0x0C, 0x1C, 0x2C),  # 7: Teal
    (0x0F, 0x07, 0x17, 0x27),  # 8: Orange
    (0x0F, 0x16, 0x27, 0x38),  # 9: Rainbow
)

PALETTE_NAMES: tuple[str, ...] = (
    "Greyscale",
    "Neutral",
    "Blue",
    "Red",
    "Green",
    "Yellow",
    "Purple",
    "Teal",
    "Orange",
    "Rainbow",
)

PALETTE_COUNT = len(PALETTE_NAMES)  # greyscale + presets
FALLBACK_PALETTE_INDEX = 1


def _preset_number(palette_index: int) -> int:
    # Out-of-range indices fall back to preset 1 instead of raising
    if 1 <= palette_index <= len(PRESET_PALETTES):
        return palette_index
    return FALLBACK_PALETTE_INDEX


def resolve_palette(palette_index: int, transparent: bool = False) -> Palette:
    """
    Resolve a palette number to 4 concrete colors.

    Args:
        palette_index: 0 for greyscale, 1-9 for presets; anything else
            resolves like preset 1
        transparent: Replace color 0 with the TRANSPARENT marker

    Returns:
        Tuple of 4 entries ordered by pixel value
    """
    if palette_index == 0:
        return GREYSCALE_TRANSPARENT if transparent else GREYSCALE

    indices = PRESET_PALETTES[_preset_number(palette_index) - 1]
    colors = [NES_COLORS[i] for i in indices]
    if transparent:
        colors[0] = TRANSPARENT
    return tuple(colors)


def palette_name(palette_index: int) -> str:
    """Display name for a palette number, with the same fallback as resolve_palette."""
    if palette_index == 0:
        return PALETTE_NAMES[0]
    return PALETTE_NAMES[_preset_number(palette_index)]


def is_transparent(color: PaletteEntry) -> bool:
    return color == TRANSPARENT
