"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files and
extracting glyph outlines as path operations and curve sets.
"""

from collections.abc import Iterator
from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from quadraster.domain import Outline, PathOp
from quadraster.exceptions import FontFormatError, FontLoadError, GlyphNotFoundError
from quadraster.io.outline import decompose, fold_outline


class FontReader:
    """Loads TTF/OTF fonts and extracts glyph outlines.

    Coordinates are returned unscaled, in font units.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            outline = reader.get_outline_for_char(ord("W"))
            print(len(outline.curves))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If font file does not exist or cannot be read
            FontFormatError: If the file is not a font fonttools recognizes
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except TTLibError as e:
            raise FontFormatError(str(self._font_path), str(e)) from e
        except OSError as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for CFF-flavored fonts

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()

        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    def glyph_name_for(self, codepoint: int) -> str:
        """Map a Unicode code point to a glyph name.

        Raises:
            GlyphNotFoundError: If the font has no glyph for the code point
            RuntimeError: If font has not been loaded yet
        """
        cmap = self._require_font().getBestCmap() or {}
        if codepoint not in cmap:
            raise GlyphNotFoundError(f"U+{codepoint:04X}")
        return cmap[codepoint]

    def iter_path_ops(self, glyph_name: str) -> Iterator[PathOp]:
        """Iterate over the path operations of a glyph.

        Raises:
            GlyphNotFoundError: If the glyph name is not in the font
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        glyph_set = font.getGlyphSet()
        if glyph_name not in glyph_set:
            raise GlyphNotFoundError(glyph_name)

        return decompose(glyph_set[glyph_name], glyph_set)

    def get_outline(self, glyph_name: str) -> Outline:
        """Decompose a glyph into an outline.

        Raises:
            GlyphNotFoundError: If the glyph name is not in the font
            RuntimeError: If font has not been loaded yet
        """
        return fold_outline(self.iter_path_ops(glyph_name), name=glyph_name)

    def get_outline_for_char(self, codepoint: int) -> Outline:
        """Decompose the glyph mapped to a Unicode code point.

        Raises:
            GlyphNotFoundError: If the font has no glyph for the code point
            RuntimeError: If font has not been loaded yet
        """
        return self.get_outline(self.glyph_name_for(codepoint))

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
