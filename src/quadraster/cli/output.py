"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from quadraster.domain import CurveSet

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Quadraster[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print font information.

    Args:
        font_path: Path to the font file
        font_type: Font format type (e.g., "TrueType", "OpenType")
        glyph_count: Total number of glyphs in font
        upm: Units per em value
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(font_path)
    line1.append(f" ({font_type})")
    console.print(line1)
    console.print(f"  {glyph_count:,} glyphs {SYM_DOT} {upm:,} UPM")


def print_render_info(source: str, width: int, height: int, segments: int, workers: int) -> None:
    """Print what is about to be rendered.

    Args:
        source: Shape or glyph description
        width: Output width in pixels
        height: Output height in pixels
        segments: Number of quadratic segments
        workers: Number of worker processes
    """
    line = Text("  ")
    line.append(source, style="bold")
    console.print(line)
    plural = "worker" if workers == 1 else "workers"
    console.print(
        f"  {width}x{height} px {SYM_DOT} {segments} segments {SYM_DOT} {workers} {plural}"
    )


def print_curve_table(curves: CurveSet) -> None:
    """Print every segment of a curve set as a table."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("p1")
    table.add_column("p2 (control)")
    table.add_column("p3")

    for index, segment in enumerate(curves):
        table.add_row(
            str(index),
            *(f"({p.x:g}, {p.y:g})" for p in segment.points()),
        )

    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    pixels: int,
    covered: int,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total render time in seconds
        pixels: Number of pixels rendered
        covered: Number of pixels with non-zero coverage
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    ratio = covered / pixels if pixels else 0.0
    console.print(f"  {pixels:,} pixels {SYM_DOT} {covered:,} covered ({ratio:.1%})")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"\n[bold yellow]{SYM_WARN} Warning:[/bold yellow] {message}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print("  No output file created")
