"""PNG writer for rendered pixel buffers.

This module provides the ImageWriter class and save_png helper for writing
RGBA pixel buffers produced by the rasterizer.
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage
from PIL.PngImagePlugin import PngInfo

from quadraster import __version__
from quadraster.exceptions import ImageSaveError

DEFAULT_OUTPUT_NAME = "img.png"


def build_png_info(source: str | None = None) -> PngInfo:
    """Build PNG text chunks identifying the renderer and source outline.

    Args:
        source: Description of the rendered outline (font and glyph, shape name)

    Returns:
        PngInfo with Software and optional Source entries
    """
    info = PngInfo()
    info.add_text("Software", f"quadraster {__version__}")
    if source:
        info.add_text("Source", source)
    return info


def save_png(
    pixels: npt.NDArray[np.uint8],
    filepath: Path | str,
    *,
    source: str | None = None,
) -> None:
    """Save an RGBA pixel buffer as a PNG file.

    Args:
        pixels: Row-major array of shape (H, W, 4), dtype uint8
        filepath: Output file path
        source: Optional description stored as a PNG text chunk

    Raises:
        ValueError: If the buffer is not an (H, W, 4) uint8 array
        ImageSaveError: If the file cannot be written
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
        raise ValueError(
            f"Expected (H, W, 4) uint8 pixels, got {pixels.shape} {pixels.dtype}"
        )

    pil_image = PILImage.fromarray(np.ascontiguousarray(pixels))
    try:
        pil_image.save(str(filepath), format="PNG", pnginfo=build_png_info(source))
    except OSError as e:
        raise ImageSaveError(str(filepath), str(e)) from e


class ImageWriter:
    """Writes rendered images with the output naming convention.

    Example:
        writer = ImageWriter(Path("out/W-coverage.png"))
        writer.write(pixels, source="JFWilwod.ttf glyph W")
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the image writer.

        Args:
            output_path: Path where the image will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        """Destination file path."""
        return self._output_path

    def write(self, pixels: npt.NDArray[np.uint8], source: str | None = None) -> Path:
        """Write the pixel buffer, creating parent directories as needed.

        Raises:
            ImageSaveError: If the directory or file cannot be written
        """
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ImageSaveError(str(self._output_path), str(e)) from e

        save_png(pixels, self._output_path, source=source)
        return self._output_path

    @staticmethod
    def get_glyph_path(glyph_name: str, directory: Path | None = None) -> Path:
        """Generate output path for a rendered glyph.

        Converts: W -> W-coverage.png

        Args:
            glyph_name: Name of the rendered glyph
            directory: Output directory (current directory if None)

        Returns:
            Path with -coverage suffix and .png extension
        """
        safe_name = glyph_name.replace("/", "_")
        return (directory or Path()) / f"{safe_name}-coverage.png"
