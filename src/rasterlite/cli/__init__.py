"""Command-line interface for rasterlite.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Image inspection (size, channels, stride)
- Color conversion, border padding, resizing and text annotation
- Wildcard file search
- Quiet mode and optional log file
"""

from rasterlite.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
