"""Configuration management for rasterlite.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CodecConfig: Image encoding settings
- TextConfig: Text annotation defaults
- LoggingConfig: Logging settings
- RasterSettings: Main application settings
"""

from rasterlite.config.settings import (
    CodecConfig,
    LoggingConfig,
    RasterSettings,
    TextConfig,
    get_default_settings,
)

__all__ = [
    "CodecConfig",
    "LoggingConfig",
    "RasterSettings",
    "TextConfig",
    "get_default_settings",
]
