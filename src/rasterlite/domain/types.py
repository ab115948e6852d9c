"""Value types shared by the raster core.

This module defines the small value types passed between the buffer and the
algorithms that operate on it:
- ColorSpace: Channel layout of a buffer (not a colorimetric space)
- BorderType: Edge-extension policy for border padding
- Scalar: Up to four 8-bit channel values used as a draw/fill color
- Point, Size, Rect: Integer geometry, always passed by value
"""

import numbers
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class ColorSpace(str, Enum):
    """Pixel channel layout.

    AUTO and UNCHANGED are meta-values:
    - AUTO: infer from channel count (1 -> GRAY, 3 -> RGB, 4 -> RGBA)
    - UNCHANGED: keep the source layout as-is
    """

    AUTO = "auto"
    UNCHANGED = "unchanged"
    GRAY = "gray"
    RGB = "rgb"
    BGR = "bgr"
    RGBA = "rgba"
    BGRA = "bgra"

    @property
    def is_meta(self) -> bool:
        """True for AUTO and UNCHANGED, which name no concrete layout."""
        return self in (ColorSpace.AUTO, ColorSpace.UNCHANGED)


class BorderType(str, Enum):
    """Policy for inventing samples beyond an image's extent.

    With source row ``abcdefgh``:
    - CONSTANT:    ``iiiiii|abcdefgh|iiiiiii`` (fill value)
    - REPLICATE:   ``aaaaaa|abcdefgh|hhhhhhh``
    - REFLECT:     ``fedcba|abcdefgh|hgfedcb``
    - REFLECT_101: ``gfedcb|abcdefgh|gfedcba`` (edge never duplicated)
    """

    CONSTANT = "constant"
    REPLICATE = "replicate"
    REFLECT = "reflect"
    REFLECT_101 = "reflect_101"


def saturate_u8(value: float) -> int:
    """Clamp a number into the 0..255 range of an unsigned byte."""
    v = int(value)
    if v < 0:
        return 0
    if v > 255:
        return 255
    return v


@dataclass(frozen=True, slots=True)
class Scalar:
    """Four 8-bit channel values used as a fill or draw color.

    Channels are positional; their meaning depends on the target buffer's
    layout (e.g. ``Scalar(255, 0, 0)`` is red in an RGB buffer and blue in a
    BGR one). Values are saturated to 0..255 on construction.

    Attributes:
        v0: Channel 0 value
        v1: Channel 1 value
        v2: Channel 2 value
        v3: Channel 3 value
    """

    v0: int = 0
    v1: int = 0
    v2: int = 0
    v3: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "v0", saturate_u8(self.v0))
        object.__setattr__(self, "v1", saturate_u8(self.v1))
        object.__setattr__(self, "v2", saturate_u8(self.v2))
        object.__setattr__(self, "v3", saturate_u8(self.v3))

    def __getitem__(self, index: int) -> int:
        return self.to_tuple()[index]

    def __len__(self) -> int:
        return 4

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Convert to a plain 4-tuple of channel values."""
        return (self.v0, self.v1, self.v2, self.v3)

    def to_bytes(self, channels: int) -> bytes:
        """Pack the first ``channels`` values (at most four) as bytes."""
        return bytes(self.to_tuple()[: max(0, min(channels, 4))])

    @classmethod
    def coerce(cls, color: "ColorLike") -> "Scalar":
        """Build a Scalar from a Scalar, a single number, or a number sequence.

        A single number fills channel 0 only and missing trailing channels
        are 0. Fractions are truncated before saturation.
        Values beyond the fourth are ignored.

        Args:
            color: Color value in any accepted form

        Returns:
            Scalar instance
        """
        if isinstance(color, Scalar):
            return color
        if isinstance(color, numbers.Real):
            return cls(int(color))
        values = [int(v) for v in list(color)[:4]]
        return cls(*values)


ColorLike = Scalar | float | Sequence[float]


@dataclass(frozen=True, slots=True)
class Point:
    """Integer pixel coordinate.

    Attributes:
        x: Column index
        y: Row index
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Size:
    """Integer extent.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    width: int
    height: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (width, height) tuple."""
        return (self.width, self.height)

    def is_empty(self) -> bool:
        """Check whether either dimension is non-positive."""
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True, slots=True)
class Rect:
    """Half-open integer rectangle.

    The bottom-right corner ``(x + width, y + height)`` lies just outside the
    rectangle.

    Attributes:
        x: Left column
        y: Top row
        width: Number of columns
        height: Number of rows
    """

    x: int
    y: int
    width: int
    height: int

    def tl(self) -> Point:
        """Top-left corner (inclusive)."""
        return Point(self.x, self.y)

    def br(self) -> Point:
        """Bottom-right corner (exclusive)."""
        return Point(self.x + self.width, self.y + self.height)

    def size(self) -> Size:
        """Extent of the rectangle."""
        return Size(self.width, self.height)
