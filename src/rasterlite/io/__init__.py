"""Input/output operations for rasterlite.

This module handles reading and writing image files and enumerating paths:
- ImageReader / imread / imdecode: decode files and bytes into Buffers
- ImageWriter / imwrite / imencode: encode Buffers to files and bytes
- glob_paths / match_wildcard: wildcard path enumeration
"""

from rasterlite.io.paths import glob_paths, match_wildcard
from rasterlite.io.reader import ImageReader, image_to_buffer, imdecode, imread
from rasterlite.io.writer import (
    ImageWriter,
    buffer_to_image,
    format_for_extension,
    imencode,
    imwrite,
)

__all__ = [
    "ImageReader",
    "ImageWriter",
    "buffer_to_image",
    "format_for_extension",
    "glob_paths",
    "image_to_buffer",
    "imdecode",
    "imencode",
    "imread",
    "imwrite",
    "match_wildcard",
]
