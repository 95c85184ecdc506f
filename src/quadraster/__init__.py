"""Quadraster - Analytic anti-aliased rasterization of quadratic Bezier outlines.

Quadraster renders closed contours built from quadratic Bezier segments (font
glyph outlines or literal shapes) into RGBA images without supersampling. Each
pixel's coverage is computed analytically by casting one horizontal and one
vertical ray from the pixel sample and softening every curve crossing into a
fractional contribution.

Example:
    $ quadraster glyph JFWilwod.ttf --char W

This will create W-coverage.png containing the anti-aliased glyph outline.
"""

__version__ = "0.1.0"
__author__ = "Quadraster contributors"

__all__ = ["__author__", "__version__"]
