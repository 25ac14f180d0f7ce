"""Output formats: PNG images and JSON metadata."""
