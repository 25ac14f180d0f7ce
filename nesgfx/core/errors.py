"""
NES CHR Extractor - Exceptions

Typed errors raised by the ROM parser, tile decoder and tile sheet composer.
"""


class NesGfxError(Exception):
    """Base class for all errors raised by nesgfx."""

    pass


class FormatError(NesGfxError):
    """Raised when the data is not an iNES / NES 2.0 container."""

    pass


class IncompleteDataError(NesGfxError):
    """Raised when a segment holds fewer bytes than the header declares."""

    def __init__(self, segment: str, expected: int, actual: int):
        self.segment = segment
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Failed to read {segment} data (expected {expected} bytes, got {actual})"
        )


class ArgumentError(NesGfxError, ValueError):
    """Raised for invalid caller input (empty path, empty tile list, short block)."""

    pass


class NotFoundError(NesGfxError, FileNotFoundError):
    """Raised when a source ROM file does not exist."""

    pass
