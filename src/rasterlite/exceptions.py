"""Exception hierarchy for Rasterlite.

The raster core never raises these for ordinary bad input; it signals failure
with the empty Buffer instead. They are used by the codec layer and the CLI,
where a failure has to be reported to a user.
"""


class RasterError(Exception):
    """Base exception for all Rasterlite errors."""

    pass


class ImageError(RasterError):
    """Errors related to image loading or saving."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file or byte stream."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")


class ImageSaveError(ImageError):
    """Error saving an image file or encoding a byte stream."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save image '{path}': {reason}")


class ImageFormatError(ImageError):
    """Unsupported or invalid image format."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid image format '{path}': {details}")


class ProcessingError(RasterError):
    """Errors surfaced while running a raster operation."""

    pass


class EmptyBufferError(ProcessingError):
    """An operation produced the empty Buffer."""

    def __init__(self, operation: str, reason: str | None = None) -> None:
        self.operation = operation
        self.reason = reason
        message = f"'{operation}' produced an empty image"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnsupportedColorSpaceError(ProcessingError):
    """Unknown color space name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unsupported color space: '{name}'")
