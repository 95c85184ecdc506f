"""Configuration settings for Quadraster."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class SampleMapping(str, Enum):
    """How output pixels map to curve-space sample points."""

    GLYPH = "glyph"
    NORMALIZED = "normalized"


class RenderConfig(BaseModel):
    """Configuration for rasterization.

    By default the ray scale equals the output size along each axis, which
    assumes curve coordinates normalized so that one output size spans the
    curve range. Set `scale` to use an explicit pixels-per-unit factor.
    """

    width: int = Field(
        default=1600,
        ge=1,
        le=16384,
        description="Output width in pixels (ignored for glyphs, sized from the outline)",
    )
    height: int = Field(
        default=1600,
        ge=1,
        le=16384,
        description="Output height in pixels (ignored for glyphs, sized from the outline)",
    )
    mapping: SampleMapping = Field(
        default=SampleMapping.NORMALIZED,
        description="Pixel to curve-space mapping",
    )
    scale: tuple[float, float] | None = Field(
        default=None,
        description="Explicit (horizontal, vertical) pixels per curve unit",
    )
    linear_epsilon: float = Field(
        default=1e-4,
        gt=0.0,
        le=0.1,
        description="Quadratic coefficient magnitude treated as zero",
    )
    tint: tuple[int, int, int] = Field(
        default=(255, 128, 64),
        description="RGB color at full coverage",
    )


class FontConfig(BaseModel):
    """Configuration for glyph selection."""

    codepoint: int = Field(
        default=87,
        ge=0,
        le=0x10FFFF,
        description="Unicode code point of the glyph to render",
    )


class OutputConfig(BaseModel):
    """Configuration for image output."""

    path: Path | None = Field(
        default=None,
        description="Output PNG path (default derived from the input)",
    )


class ProcessingConfig(BaseModel):
    """Configuration for render execution."""

    max_workers: int | None = Field(
        default=1,
        ge=1,
        description="Worker processes for band rendering (1 = in-process, None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class QuadrasterSettings(BaseModel):
    """Main application settings."""

    render: RenderConfig = Field(default_factory=RenderConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> QuadrasterSettings:
    """Get default application settings."""
    return QuadrasterSettings()
