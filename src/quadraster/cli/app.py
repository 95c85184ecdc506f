"""CLI application entry point for quadraster.

This module provides the main CLI interface using Typer.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import numpy as np
import numpy.typing as npt
import structlog
import typer

from quadraster import __version__
from quadraster.cli.output import (
    console,
    print_cancellation_notice,
    print_curve_table,
    print_error,
    print_font_info,
    print_header,
    print_render_info,
    print_step,
    print_success,
    print_warning,
)
from quadraster.config import (
    FontConfig,
    LoggingConfig,
    OutputConfig,
    ProcessingConfig,
    QuadrasterSettings,
    RenderConfig,
    SampleMapping,
)
from quadraster.core import Rasterizer
from quadraster.domain import Point
from quadraster.exceptions import (
    FontFormatError,
    FontLoadError,
    GlyphError,
    ImageSaveError,
    QuadrasterError,
)
from quadraster.io import DEFAULT_OUTPUT_NAME, SHAPES, FontReader, ImageWriter
from quadraster.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="quadraster",
    help="Rasterize quadratic Bezier outlines with analytic dual-axis coverage.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Quadraster[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Rasterize literal shapes and font glyphs to PNG coverage images."""
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = QuadrasterSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level.upper()),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"settings": settings, "quiet": quiet}


@contextmanager
def _exit_on_error() -> Iterator[None]:
    """Map quadraster errors to a printed message and a non-zero exit code."""
    try:
        yield
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except KeyboardInterrupt:
        print_cancellation_notice()
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1) from None
    except FontFormatError as e:
        print_error(f"Not a readable font: {e.path}", details=e.details)
        raise typer.Exit(code=1) from None
    except GlyphError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None
    except ImageSaveError as e:
        print_error(f"Could not save image: {e.reason}")
        raise typer.Exit(code=1) from None
    except QuadrasterError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1) from None


def _resolve_codepoint(char: str | None, codepoint: int | None, default: int) -> int:
    """Pick the code point from --char or --codepoint."""
    if char is not None and codepoint is not None:
        print_error("Cannot use --char and --codepoint together")
        raise typer.Exit(code=1)

    if char is not None:
        if len(char) != 1:
            print_error(
                f"Invalid character: {char!r}",
                details="--char takes exactly one character.",
            )
            raise typer.Exit(code=1)
        return ord(char)

    return codepoint if codepoint is not None else default


def _write_image(
    rasterizer: Rasterizer,
    coverage: npt.NDArray[np.float64],
    output_path: Path,
    source: str,
    quiet: bool,
) -> None:
    writer = ImageWriter(output_path)
    writer.write(rasterizer.colorize(coverage), source=source)

    if not quiet:
        stats = rasterizer.stats
        print_success(
            output_path=str(output_path),
            file_size=_format_file_size(output_path),
            total_time_s=stats.duration_seconds,
            pixels=stats.pixel_count,
            covered=stats.covered_pixels,
        )


@app.command()
def shape(
    ctx: typer.Context,
    name: Annotated[
        str,
        typer.Argument(help=f"Shape to render ({'|'.join(SHAPES)})"),
    ] = "blobs",
    width: Annotated[
        int,
        typer.Option("--width", "-W", help="Image width in pixels", min=1, max=16384),
    ] = 1600,
    height: Annotated[
        int,
        typer.Option("--height", "-H", help="Image height in pixels", min=1, max=16384),
    ] = 1600,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help=f"Output path (default: {DEFAULT_OUTPUT_NAME})"),
    ] = None,
    workers: Annotated[
        int,
        typer.Option("--workers", "-j", help="Number of parallel workers", min=1),
    ] = 1,
) -> None:
    """Render a built-in shape defined in the unit square.

    Example:
        quadraster shape blobs -W 1600 -H 1600 -o img.png
    """
    settings: QuadrasterSettings = ctx.obj["settings"]
    quiet: bool = ctx.obj["quiet"]

    if name not in SHAPES:
        print_error(
            f"Unknown shape: {name}",
            details=f"Available shapes: {', '.join(SHAPES)}",
        )
        raise typer.Exit(code=1)

    settings = settings.model_copy(
        update={
            "render": RenderConfig(width=width, height=height, mapping=SampleMapping.NORMALIZED),
            "output": OutputConfig(path=output or Path(DEFAULT_OUTPUT_NAME)),
            "processing": ProcessingConfig(max_workers=workers),
        }
    )

    if not quiet:
        print_header(__version__)

    with _exit_on_error():
        curves = SHAPES[name]()
        rasterizer = Rasterizer(
            settings.render,
            max_workers=settings.processing.max_workers,
            logger=structlog.get_logger("quadraster"),
        )

        if not quiet:
            print_step("Rendering")
            print_render_info(f"shape {name}", width, height, len(curves), workers)

        coverage = rasterizer.render(curves, Point(0.0, 0.0), width, height)
        _write_image(rasterizer, coverage, settings.output.path, f"shape {name}", quiet)


@app.command()
def glyph(
    ctx: typer.Context,
    font: Annotated[
        Path,
        typer.Argument(help="Path to input TTF/OTF font file", show_default=False),
    ],
    char: Annotated[
        str | None,
        typer.Option("--char", "-c", help="Character to render (default: W)"),
    ] = None,
    codepoint: Annotated[
        int | None,
        typer.Option("--codepoint", "-u", help="Unicode code point to render", min=0),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: {glyph}-coverage.png)"),
    ] = None,
    dump_curves: Annotated[
        bool,
        typer.Option("--dump-curves", help="Print the decomposed quadratic segments"),
    ] = False,
    workers: Annotated[
        int,
        typer.Option("--workers", "-j", help="Number of parallel workers", min=1),
    ] = 1,
) -> None:
    """Render one glyph of a font at one pixel per font unit.

    The image spans the glyph's bounding box. Cubic outline segments are not
    supported; they are skipped and reported.

    Example:
        quadraster glyph JFWilwod.ttf --char W
    """
    settings: QuadrasterSettings = ctx.obj["settings"]
    quiet: bool = ctx.obj["quiet"]

    cp = _resolve_codepoint(char, codepoint, settings.font.codepoint)
    settings = settings.model_copy(
        update={
            "render": RenderConfig(mapping=SampleMapping.GLYPH),
            "font": FontConfig(codepoint=cp),
            "processing": ProcessingConfig(max_workers=workers),
        }
    )

    if not quiet:
        print_header(__version__)

    with _exit_on_error():
        if not quiet:
            print_step("Loading font")

        with FontReader(font) as reader:
            if not quiet:
                print_font_info(
                    font_path=str(font),
                    font_type=reader.format,
                    glyph_count=reader.glyph_count,
                    upm=reader.units_per_em,
                )
            outline = reader.get_outline_for_char(settings.font.codepoint)

        if outline.dropped_cubics:
            print_warning(
                f"{outline.dropped_cubics} cubic segments in '{outline.name}' "
                "are not supported and were skipped"
            )

        if dump_curves:
            print_step(f"Curves of '{outline.name}'")
            print_curve_table(outline.curves)

        output_path = output or ImageWriter.get_glyph_path(outline.name)
        rasterizer = Rasterizer(
            settings.render,
            max_workers=settings.processing.max_workers,
            logger=structlog.get_logger("quadraster"),
        )

        if not quiet:
            print_step("Rendering")
            print_render_info(
                f"glyph {outline.name} (U+{cp:04X})",
                outline.bbox.pixel_width,
                outline.bbox.pixel_height,
                len(outline.curves),
                workers,
            )

        coverage = rasterizer.render_outline(outline)
        _write_image(
            rasterizer, coverage, output_path, f"{font.name} glyph {outline.name}", quiet
        )


@app.command()
def info(
    font: Annotated[
        Path,
        typer.Argument(help="Path to input TTF/OTF font file", show_default=False),
    ],
) -> None:
    """Print font format, glyph count and units per em."""
    with _exit_on_error(), FontReader(font) as reader:
        print_font_info(
            font_path=str(font),
            font_type=reader.format,
            glyph_count=reader.glyph_count,
            upm=reader.units_per_em,
        )


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"

    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
