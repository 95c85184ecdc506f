"""Logging utilities for Quadraster."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class RenderStats:
    """Statistics from one render."""

    width: int = 0
    height: int = 0
    segment_count: int = 0
    covered_pixels: int = 0
    full_pixels: int = 0
    dropped_cubics: int = 0
    workers: int = 1
    start_time: float | None = None
    end_time: float | None = None

    @property
    def pixel_count(self) -> int:
        """Total pixels in the output buffer."""
        return self.width * self.height

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def coverage_ratio(self) -> float:
        """Fraction of pixels with any coverage."""
        if self.pixel_count == 0:
            return 0.0
        return self.covered_pixels / self.pixel_count


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from an earlier call instead of stacking them
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("quadraster")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RenderLogger:
    """Logger for tracking render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_render_start(
        self,
        width: int,
        height: int,
        segment_count: int,
        workers: int,
    ) -> None:
        """Log start of a render and reset statistics."""
        self._stats = RenderStats(
            width=width,
            height=height,
            segment_count=segment_count,
            workers=workers,
            start_time=time.time(),
        )
        self._logger.debug(
            "Render started",
            width=width,
            height=height,
            segments=segment_count,
            workers=workers,
        )

    def log_band_complete(self, row_start: int, row_stop: int, duration_ms: float) -> None:
        """Log completion of one band of rows."""
        self._logger.debug(
            "Band rendered",
            rows=f"{row_start}-{row_stop}",
            duration_ms=round(duration_ms, 2),
        )

    def log_render_complete(self, covered_pixels: int, full_pixels: int) -> None:
        """Log successful render."""
        self._stats.end_time = time.time()
        self._stats.covered_pixels = covered_pixels
        self._stats.full_pixels = full_pixels
        self._logger.info(
            "Render complete",
            width=self._stats.width,
            height=self._stats.height,
            covered=covered_pixels,
            full=full_pixels,
            duration_ms=round(self._stats.duration_seconds * 1000, 2),
        )

    def log_dropped_cubics(self, glyph_name: str, count: int) -> None:
        """Record cubic segments the outline fold left out of the curve set."""
        self._stats.dropped_cubics += count
        if count:
            self._logger.info(
                "Rendered without cubic segments",
                glyph=glyph_name,
                count=count,
            )

    def log_render_error(self, error: Exception, traceback: str | None = None) -> None:
        """Log render failure."""
        self._logger.error(
            "Render failed",
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
