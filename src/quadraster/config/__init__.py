"""Configuration management for quadraster.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RenderConfig: Output size, sample mapping, ray scale and tint
- FontConfig: Glyph selection
- OutputConfig: Image output settings
- ProcessingConfig: Band-parallel render settings
- LoggingConfig: Logging settings
- QuadrasterSettings: Main application settings
"""

from quadraster.config.settings import (
    FontConfig,
    LoggingConfig,
    OutputConfig,
    ProcessingConfig,
    QuadrasterSettings,
    RenderConfig,
    SampleMapping,
    get_default_settings,
)

__all__ = [
    "FontConfig",
    "LoggingConfig",
    "OutputConfig",
    "ProcessingConfig",
    "QuadrasterSettings",
    "RenderConfig",
    "SampleMapping",
    "get_default_settings",
]
