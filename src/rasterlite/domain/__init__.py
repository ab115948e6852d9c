"""Domain models for rasterlite.

This module contains the raster buffer and the value types the algorithms
exchange. All value types are immutable (frozen dataclasses or enums) and
passed by value; the Buffer is the only mutable entity.

Key classes:
- Buffer: Strided 8-bit image with owned or borrowed memory
- BufferLayout: Height, width, channels and stride of a buffer
- Ownership: Owned (reference counted) or borrowed memory
- ColorSpace: Channel layout (GRAY, RGB, BGR, RGBA, BGRA, AUTO, UNCHANGED)
- BorderType: Edge-extension policy
- Scalar: Up to four channel values used as a color
- Point, Size, Rect: Integer geometry
"""

from rasterlite.domain.buffer import Buffer, BufferLayout, Ownership
from rasterlite.domain.types import (
    BorderType,
    ColorLike,
    ColorSpace,
    Point,
    Rect,
    Scalar,
    Size,
    saturate_u8,
)

__all__: list[str] = [
    # Enums
    "BorderType",
    "ColorSpace",
    "Ownership",
    # Core types
    "Buffer",
    "BufferLayout",
    "ColorLike",
    "Point",
    "Rect",
    "Scalar",
    "Size",
    "saturate_u8",
]
