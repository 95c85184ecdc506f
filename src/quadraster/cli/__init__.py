"""Command-line interface for quadraster.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Built-in shape and font glyph rendering to PNG
- Curve dumps for inspecting glyph decomposition
- Quiet output mode
- Detailed error reporting
"""

from quadraster.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
