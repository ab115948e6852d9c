"""Utility functions for rasterlite.

This module provides utility functions including:

- Logging setup and configuration
- Per-image progress and statistics tracking for the CLI
"""

from rasterlite.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
