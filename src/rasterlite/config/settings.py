"""Configuration settings for Rasterlite."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class CodecConfig(BaseModel):
    """Configuration for image encoding."""

    jpeg_quality: int = Field(
        default=95,
        ge=1,
        le=100,
        description="JPEG quality used when writing .jpg/.jpeg files",
    )
    default_extension: str = Field(
        default="png",
        description="Format used for unrecognised extensions and in-memory encoding",
    )

    @field_validator("default_extension")
    @classmethod
    def _strip_dot(cls, value: str) -> str:
        return value.lower().lstrip(".")


class TextConfig(BaseModel):
    """Defaults for text annotation."""

    font_scale: float = Field(
        default=1.0,
        ge=1.0,
        le=16.0,
        description="Glyph scale factor (rounded to an integer)",
    )
    thickness: int = Field(
        default=1,
        ge=1,
        le=8,
        description="Glyph dilation in pixels",
    )
    color: tuple[int, int, int, int] = Field(
        default=(255, 255, 255, 255),
        description="Text color as channel values",
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


class RasterSettings(BaseModel):
    """Main application settings."""

    codec: CodecConfig = Field(default_factory=CodecConfig)
    text: TextConfig = Field(default_factory=TextConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> RasterSettings:
    """Get default application settings."""
    return RasterSettings()
