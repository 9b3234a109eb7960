"""Text rendering of alignment grids."""
