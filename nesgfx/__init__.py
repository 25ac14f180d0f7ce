"""
NES CHR Extractor.

Reads iNES / NES 2.0 ROM images, decodes their CHR tiles and renders
tile sheets for inspection and export.
"""

__version__ = "1.0.0"
