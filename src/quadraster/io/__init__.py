"""Outline and image I/O layer for quadraster.

This module supplies curve data to the rasterizer and writes its output.

Key responsibilities:
- Load TTF/OTF fonts with fonttools
- Decompose glyphs into path operations and fold them into curve sets
- Provide literal unit-square shapes
- Write RGBA pixel buffers as PNG files

Key classes:
- FontReader: Load fonts and extract glyph outlines
- ImageWriter: Save rendered images
"""

from quadraster.io.outline import PathOpPen, decompose, fold_outline
from quadraster.io.reader import FontReader
from quadraster.io.shapes import SHAPES, reference_blobs, unit_diamond
from quadraster.io.writer import DEFAULT_OUTPUT_NAME, ImageWriter, save_png

__all__ = [
    "DEFAULT_OUTPUT_NAME",
    "SHAPES",
    "FontReader",
    "ImageWriter",
    "PathOpPen",
    "decompose",
    "fold_outline",
    "reference_blobs",
    "save_png",
    "unit_diamond",
]
