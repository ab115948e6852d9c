"""Image reader for decoding files and byte streams into Buffers.

This module provides the ImageReader class, which decodes images with Pillow,
and the ``imread``/``imdecode`` helpers, which report failure with the empty
Buffer instead of raising.
"""

import io
from pathlib import Path

import structlog
from PIL import Image

from rasterlite.core.color import desired_channels, is_bgr_family, swap_rb_inplace
from rasterlite.domain import Buffer, ColorSpace
from rasterlite.exceptions import ImageLoadError, RasterError

logger = structlog.get_logger(__name__)

_MODE_FOR_CHANNELS = {1: "L", 3: "RGB", 4: "RGBA"}

# Pillow failures seen on corrupt, truncated or oversized input
_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def _native_mode(image: Image.Image) -> str:
    """Closest 8-bit interleaved mode that keeps the image's own channels."""
    mode = image.mode
    if mode in ("L", "LA", "RGB", "RGBA"):
        return mode
    if mode == "1" or mode.startswith("I") or mode == "F":
        return "L"
    if mode == "P":
        return "RGBA" if "transparency" in image.info else "RGB"
    if mode == "PA" or "A" in image.getbands():
        return "RGBA"
    return "RGB"


def image_to_buffer(image: Image.Image, flag: ColorSpace = ColorSpace.UNCHANGED) -> Buffer:
    """Convert a Pillow image into a new owned Buffer.

    Args:
        image: Decoded Pillow image
        flag: Requested layout; AUTO/UNCHANGED keep the native channel count
            (1-4), BGR/BGRA deliver samples in blue-first order

    Returns:
        Tightly packed Buffer
    """
    if flag.is_meta:
        mode = _native_mode(image)
    else:
        mode = _MODE_FOR_CHANNELS[desired_channels(flag)]

    if image.mode != mode:
        image = image.convert(mode)

    channels = len(image.getbands())
    width, height = image.size
    buf = Buffer.wrap_owned(height, width, channels, bytearray(image.tobytes()))

    if is_bgr_family(flag):
        swap_rb_inplace(buf)
    return buf


class ImageReader:
    """Decodes image files into Buffers.

    Example:
        reader = ImageReader(Path("photo.png"))
        buf = reader.load(ColorSpace.BGR)
        print(buf.width, buf.height, buf.channels)
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to the image file
        """
        self._image_path = image_path

    @property
    def path(self) -> Path:
        return self._image_path

    def load(self, flag: ColorSpace = ColorSpace.UNCHANGED) -> Buffer:
        """Decode the image file.

        Args:
            flag: Requested layout, see ``image_to_buffer``

        Returns:
            Newly allocated Buffer

        Raises:
            FileNotFoundError: If the image file does not exist
            ImageLoadError: If the file cannot be decoded
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            with Image.open(self._image_path) as image:
                image.load()
                return image_to_buffer(image, flag)
        except _DECODE_ERRORS as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

    @staticmethod
    def decode(data: bytes, flag: ColorSpace = ColorSpace.UNCHANGED) -> Buffer:
        """Decode an in-memory encoded image.

        Args:
            data: Encoded image bytes (PNG, JPEG, BMP, TGA, ...)
            flag: Requested layout, see ``image_to_buffer``

        Returns:
            Newly allocated Buffer

        Raises:
            ImageLoadError: If the bytes are empty or cannot be decoded
        """
        if not data:
            raise ImageLoadError("<memory>", "empty input")

        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                return image_to_buffer(image, flag)
        except _DECODE_ERRORS as e:
            raise ImageLoadError("<memory>", str(e)) from e


def imread(path: str | Path, flag: ColorSpace = ColorSpace.UNCHANGED) -> Buffer:
    """Read an image file; returns the empty Buffer on any failure."""
    try:
        return ImageReader(Path(path)).load(flag)
    except (FileNotFoundError, RasterError) as e:
        logger.debug("imread failed", path=str(path), error=str(e))
        return Buffer()


def imdecode(data: bytes, flag: ColorSpace = ColorSpace.UNCHANGED) -> Buffer:
    """Decode image bytes; returns the empty Buffer on any failure."""
    try:
        return ImageReader.decode(data, flag)
    except RasterError as e:
        logger.debug("imdecode failed", error=str(e))
        return Buffer()
