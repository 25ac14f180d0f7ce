"""PIL rendering of CHR tiles and tile sheets."""
