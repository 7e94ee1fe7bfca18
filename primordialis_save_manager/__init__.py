"""Save selection, rotating autosaves and save swapping around Primordialis runs."""
