"""Image writer for encoding Buffers to files and byte streams.

The output format is chosen by file extension: png, jpg/jpeg, bmp and tga.
Unrecognised extensions fall back to the configured lossless default (PNG).
Writing a 4-channel buffer to a format without alpha support (JPEG) is not
checked here; Pillow rejects it and the write fails.
"""

import io
from pathlib import Path

import structlog
from PIL import Image

from rasterlite.config import CodecConfig
from rasterlite.domain import Buffer
from rasterlite.exceptions import ImageFormatError, ImageSaveError, RasterError

logger = structlog.get_logger(__name__)

_FORMAT_FOR_EXTENSION = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "bmp": "BMP",
    "tga": "TGA",
}

_MODE_FOR_CHANNELS = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}


def format_for_extension(ext: str, default: str = "png") -> str:
    """Pillow format name for a file extension (with or without the dot)."""
    key = ext.lower().lstrip(".")
    if key in _FORMAT_FOR_EXTENSION:
        return _FORMAT_FOR_EXTENSION[key]
    return _FORMAT_FOR_EXTENSION.get(default, "PNG")


def buffer_to_image(buf: Buffer) -> Image.Image:
    """Copy a Buffer into a Pillow image, honouring its row stride.

    Raises:
        ValueError: If the buffer is empty or has more than four channels
    """
    if buf.is_empty():
        raise ValueError("cannot convert an empty buffer")
    mode = _MODE_FOR_CHANNELS.get(buf.channels)
    if mode is None:
        raise ValueError(f"unsupported channel count: {buf.channels}")
    raw = buf.data[: buf.height * buf.stride].tobytes()  # type: ignore[index]
    return Image.frombytes(mode, (buf.width, buf.height), raw, "raw", mode, buf.stride, 1)


class ImageWriter:
    """Encodes Buffers to image files.

    Example:
        writer = ImageWriter(Path("out.jpg"))
        writer.save(buf)
    """

    def __init__(self, output_path: Path, config: CodecConfig | None = None) -> None:
        """Initialize the image writer.

        Args:
            output_path: Destination path; its extension selects the format
            config: Codec settings (JPEG quality, default format)
        """
        self._output_path = output_path
        self._config = config or CodecConfig()

    @property
    def format(self) -> str:
        """Pillow format name chosen for the output path."""
        return format_for_extension(self._output_path.suffix, self._config.default_extension)

    def save(self, buf: Buffer) -> None:
        """Write ``buf`` to the output path.

        Raises:
            ImageFormatError: If the buffer has more than four channels
            ImageSaveError: If the buffer is empty or the file cannot be written
        """
        if buf.channels > 4:
            raise ImageFormatError(str(self._output_path), f"{buf.channels} channels")
        try:
            image = buffer_to_image(buf)
            image.save(self._output_path, format=self.format, **self._save_options(self.format))
        except (OSError, ValueError, KeyError) as e:
            raise ImageSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def encode(buf: Buffer, ext: str = ".png", config: CodecConfig | None = None) -> bytes:
        """Encode ``buf`` in memory.

        Args:
            buf: Buffer to encode
            ext: Extension selecting the format
            config: Codec settings

        Returns:
            Encoded bytes

        Raises:
            ImageSaveError: If the buffer is empty or cannot be encoded
        """
        config = config or CodecConfig()
        fmt = format_for_extension(ext, config.default_extension)
        out = io.BytesIO()
        try:
            image = buffer_to_image(buf)
            image.save(out, format=fmt, **ImageWriter(Path(ext), config)._save_options(fmt))
        except (OSError, ValueError, KeyError) as e:
            raise ImageSaveError("<memory>", str(e)) from e
        return out.getvalue()

    def _save_options(self, fmt: str) -> dict[str, int]:
        if fmt == "JPEG":
            return {"quality": self._config.jpeg_quality}
        return {}

    @staticmethod
    def get_derived_path(input_path: Path, tag: str) -> Path:
        """Generate an output path next to the input.

        Converts: photo.png -> photo-gray.png (with tag "gray")

        Args:
            input_path: Original image path
            tag: Suffix describing the operation

        Returns:
            Path with ``-{tag}`` inserted before the extension
        """
        return input_path.parent / f"{input_path.stem}-{tag}{input_path.suffix}"


def imwrite(path: str | Path, buf: Buffer, config: CodecConfig | None = None) -> bool:
    """Write an image file; returns False on any failure."""
    try:
        ImageWriter(Path(path), config).save(buf)
    except RasterError as e:
        logger.debug("imwrite failed", path=str(path), error=str(e))
        return False
    return True


def imencode(buf: Buffer, ext: str = ".png", config: CodecConfig | None = None) -> bytes | None:
    """Encode an image in memory; returns None on any failure."""
    try:
        return ImageWriter.encode(buf, ext, config)
    except RasterError as e:
        logger.debug("imencode failed", ext=ext, error=str(e))
        return None
