"""Exception hierarchy for Quadraster."""


class QuadrasterError(Exception):
    """Base exception for all Quadraster errors."""

    pass


class FontError(QuadrasterError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class FontFormatError(FontError):
    """Unsupported or invalid font format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid font format '{path}': {details}")


class GlyphError(QuadrasterError):
    """Errors related to glyph outline extraction."""

    pass


class GlyphNotFoundError(GlyphError):
    """Requested glyph not found in font."""

    def __init__(self, glyph: str) -> None:
        self.glyph = glyph
        super().__init__(f"Glyph '{glyph}' not found in font")


class EmptyOutlineError(GlyphError):
    """Glyph outline produced no quadratic segments."""

    def __init__(self, glyph: str) -> None:
        self.glyph = glyph
        super().__init__(f"Glyph '{glyph}' has no renderable outline")


class RenderError(QuadrasterError):
    """Errors raised around rendering, outside the coverage math."""

    pass


class ImageSaveError(RenderError):
    """Error writing a rendered image."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save image '{path}': {reason}")


class CurveCapacityError(RenderError):
    """Curve set does not fit into a fixed-size GPU uniform array."""

    def __init__(self, curve_count: int, capacity: int) -> None:
        self.curve_count = curve_count
        self.capacity = capacity
        super().__init__(
            f"Curve set has {curve_count} segments, shader capacity is {capacity}"
        )
