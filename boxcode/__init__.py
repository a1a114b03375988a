"""boxcode -- binary data as grids of Unicode box-drawing characters.

Encodes arbitrary bytes as a rectangular grid of box-drawing glyphs that
reads like an ASCII-art table and decodes back to the original bytes.
Each filled cell carries 2, 3 or 4 bits depending on how many of its
neighbours are filled, and the stroke weight of its glyph (light, heavy,
mixed) selects the value. Fixed text labels can be embedded in the grid.
"""

__version__ = "0.1.0"
