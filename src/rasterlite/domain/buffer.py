"""Strided 8-bit raster buffer with shared or borrowed ownership.

A Buffer is a rectangular grid of interleaved unsigned-byte samples laid out
row-major with an explicit row stride. It is the central type of rasterlite:
every algorithm reads from or writes into one.

Ownership model:
- OWNED buffers hold a reference-counted region. Shallow copies (``share()``
  or ``copy.copy``) increment the count; ``release()`` or garbage collection
  decrements it. When the count reaches zero the region's release callback,
  if any, runs exactly once.
- BORROWED buffers view caller memory and never run a release callback.

Example:
    >>> buf = Buffer.allocate(2, 3, 3)
    >>> alias = buf.share()
    >>> alias.shares_memory(buf)
    True
    >>> deep = buf.duplicate()
    >>> deep.shares_memory(buf)
    False
"""

import weakref
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import structlog

from rasterlite.domain.types import ColorLike, Scalar, Size

logger = structlog.get_logger(__name__)

Releaser = Callable[[Any], None]


class Ownership(Enum):
    """Who is responsible for the lifetime of a buffer's memory."""

    OWNED = auto()
    BORROWED = auto()


@dataclass(frozen=True, slots=True)
class BufferLayout:
    """Geometry of a buffer.

    Attributes:
        height: Number of rows
        width: Number of pixels per row
        channels: Samples per pixel (1-4)
        stride: Bytes from the start of one row to the start of the next
    """

    height: int
    width: int
    channels: int
    stride: int = 0

    @property
    def min_stride(self) -> int:
        """Tightly packed row size in bytes."""
        return self.width * self.channels

    @property
    def is_valid(self) -> bool:
        """True when all dimensions are positive."""
        return self.height > 0 and self.width > 0 and self.channels > 0

    @property
    def nbytes(self) -> int:
        """Bytes required to hold every row at the layout's stride."""
        return self.height * max(self.stride, self.min_stride)

    def normalized(self) -> "BufferLayout":
        """Return a copy whose stride is raised to at least ``min_stride``."""
        if self.stride >= self.min_stride:
            return self
        return BufferLayout(self.height, self.width, self.channels, self.min_stride)


class _Region:
    """Reference-counted byte region shared by shallow Buffer copies."""

    def __init__(
        self,
        memory: Any,
        view: memoryview,
        ownership: Ownership,
        releaser: Releaser | None = None,
    ) -> None:
        self.memory = memory
        self.view = view
        self.ownership = ownership
        self.refs = 0
        self.released = False
        self._releaser = releaser

    def acquire(self) -> None:
        self.refs += 1

    def drop(self) -> None:
        self.refs -= 1
        if self.refs > 0 or self.released:
            return
        self.released = True
        if self.ownership is Ownership.OWNED and self._releaser is not None:
            self._releaser(self.memory)
        self.memory = None
        self.view = None


def _as_byte_view(memory: Any) -> memoryview | None:
    """Expose any buffer-protocol object as a flat unsigned-byte view."""
    try:
        view = memoryview(memory)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
    except (TypeError, ValueError) as e:
        logger.debug("Memory is not a contiguous byte buffer", error=str(e))
        return None
    return view


class Buffer:
    """Rectangular grid of interleaved 8-bit samples.

    A Buffer with non-positive dimensions or no data is the canonical empty
    buffer; every operation treats it as invalid input. Use the named
    constructors rather than calling ``Buffer(...)`` with memory directly.

    Attributes:
        height: Number of rows
        width: Number of pixels per row
        channels: Samples per pixel
        stride: Bytes per row, at least ``width * channels``
        data: Flat byte view over the region, or None when empty
        ownership: Whether the region is owned or borrowed
    """

    def __init__(
        self,
        layout: BufferLayout | None = None,
        memory: Any = None,
        ownership: Ownership = Ownership.OWNED,
        releaser: Releaser | None = None,
    ) -> None:
        """Create a buffer over ``memory``; with no arguments, an empty one.

        Args:
            layout: Buffer geometry; the stride is raised to the minimum
            memory: Any writable buffer-protocol object of sufficient size
            ownership: Whether this buffer owns ``memory``
            releaser: Called with ``memory`` once the last owner releases it
        """
        self.height = 0
        self.width = 0
        self.channels = 0
        self.stride = 0
        self.data: memoryview | None = None
        self.ownership = Ownership.OWNED
        self._region: _Region | None = None
        self._finalizer: weakref.finalize | None = None

        if layout is None or memory is None:
            return

        layout = layout.normalized()
        if not layout.is_valid:
            return

        view = _as_byte_view(memory)
        if view is None:
            return
        if len(view) < layout.nbytes:
            logger.debug(
                "Memory region too small for layout",
                available=len(view),
                required=layout.nbytes,
            )
            return

        self._attach(_Region(memory, view, ownership, releaser), layout)

    # ----------------------------------------------------------------- #
    # Named constructors
    # ----------------------------------------------------------------- #

    @classmethod
    def allocate(cls, height: int, width: int, channels: int, stride: int = 0) -> "Buffer":
        """Allocate a new owned, zero-filled buffer.

        Args:
            height: Number of rows
            width: Number of pixels per row
            channels: Samples per pixel
            stride: Row stride in bytes (raised to ``width * channels``)

        Returns:
            Owned buffer, or the empty buffer for non-positive dimensions
        """
        layout = BufferLayout(height, width, channels, stride).normalized()
        if not layout.is_valid:
            return cls()
        return cls(layout, bytearray(layout.nbytes), Ownership.OWNED)

    @classmethod
    def wrap(
        cls,
        height: int,
        width: int,
        channels: int,
        memory: Any,
        stride: int = 0,
        owning: bool = False,
        releaser: Releaser | None = None,
    ) -> "Buffer":
        """Wrap caller memory.

        Args:
            height: Number of rows
            width: Number of pixels per row
            channels: Samples per pixel
            memory: Buffer-protocol object holding at least ``height * stride`` bytes
            stride: Row stride in bytes (raised to ``width * channels``)
            owning: Take ownership of ``memory``
            releaser: Release callback for owned memory, ignored when borrowing

        Returns:
            Buffer over ``memory``, or the empty buffer for invalid input
        """
        ownership = Ownership.OWNED if owning else Ownership.BORROWED
        return cls(
            BufferLayout(height, width, channels, stride),
            memory,
            ownership,
            releaser if owning else None,
        )

    @classmethod
    def wrap_borrowed(
        cls, height: int, width: int, channels: int, memory: Any, stride: int = 0
    ) -> "Buffer":
        """Wrap caller memory without taking ownership."""
        return cls.wrap(height, width, channels, memory, stride, owning=False)

    @classmethod
    def wrap_owned(
        cls,
        height: int,
        width: int,
        channels: int,
        memory: Any,
        stride: int = 0,
        releaser: Releaser | None = None,
    ) -> "Buffer":
        """Wrap caller memory and take ownership of it."""
        return cls.wrap(height, width, channels, memory, stride, owning=True, releaser=releaser)

    # ----------------------------------------------------------------- #
    # State
    # ----------------------------------------------------------------- #

    def is_empty(self) -> bool:
        """Check whether this is the canonical empty buffer."""
        return (
            self.data is None or self.height <= 0 or self.width <= 0 or self.channels <= 0
        )

    @property
    def layout(self) -> BufferLayout:
        """Current geometry."""
        return BufferLayout(self.height, self.width, self.channels, self.stride)

    @property
    def size(self) -> Size:
        """Width and height."""
        return Size(self.width, self.height)

    @property
    def row_bytes(self) -> int:
        """Logical row width in bytes (excludes stride padding)."""
        return self.width * self.channels

    @property
    def writable(self) -> bool:
        """True when the buffer is non-empty and its memory is writable."""
        return not self.is_empty() and not self.data.readonly  # type: ignore[union-attr]

    def shares_memory(self, other: "Buffer") -> bool:
        """Check whether both buffers are backed by the same memory.

        This is the collision test used by transforms that can write into a
        caller-supplied destination.
        """
        if self.is_empty() or other.is_empty():
            return False
        if self._region is other._region:
            return True
        return self.data.obj is other.data.obj  # type: ignore[union-attr]

    # ----------------------------------------------------------------- #
    # Pixel access
    # ----------------------------------------------------------------- #

    def offset(self, x: int, y: int) -> int:
        """Byte offset of pixel (x, y) in ``data``."""
        return y * self.stride + x * self.channels

    def row(self, y: int) -> memoryview:
        """Writable view over the logical bytes of row ``y``.

        Raises:
            IndexError: If the buffer is empty or ``y`` is out of range
        """
        if self.is_empty() or not 0 <= y < self.height:
            raise IndexError(f"row {y} out of range")
        start = y * self.stride
        return self.data[start : start + self.row_bytes]  # type: ignore[index]

    def pixel(self, x: int, y: int) -> tuple[int, ...]:
        """Channel values of pixel (x, y).

        Raises:
            IndexError: If (x, y) lies outside the buffer
        """
        if self.is_empty() or not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) out of range")
        start = self.offset(x, y)
        return tuple(self.data[start : start + self.channels])  # type: ignore[index]

    def fill(self, color: ColorLike) -> None:
        """Set every pixel to ``color`` (first ``channels`` values)."""
        if not self.writable:
            return
        row = Scalar.coerce(color).to_bytes(self.channels) * self.width
        for y in range(self.height):
            start = y * self.stride
            self.data[start : start + self.row_bytes] = row  # type: ignore[index]

    def tobytes(self) -> bytes:
        """Pixel content as tightly packed bytes (stride padding dropped)."""
        if self.is_empty():
            return b""
        if self.stride == self.row_bytes:
            return self.data[: self.height * self.stride].tobytes()  # type: ignore[index]
        return b"".join(self.row(y).tobytes() for y in range(self.height))

    # ----------------------------------------------------------------- #
    # Copies and lifetime
    # ----------------------------------------------------------------- #

    def share(self) -> "Buffer":
        """Shallow copy: a new Buffer over the same region."""
        out = Buffer()
        if self._region is not None and not self.is_empty():
            out._attach(self._region, self.layout)
        return out

    def duplicate(self) -> "Buffer":
        """Deep copy into a new owned, tightly packed buffer.

        Rows are copied using the logical row width, so stride padding is not
        carried over.
        """
        if self.is_empty():
            return Buffer()
        out = Buffer.allocate(self.height, self.width, self.channels)
        n = self.row_bytes
        for y in range(self.height):
            start = y * out.stride
            out.data[start : start + n] = self.row(y)  # type: ignore[index]
        return out

    def assign(self, other: "Buffer") -> None:
        """Rebind this buffer to ``other``'s region and layout.

        After the call both buffers share memory, exactly as after a shallow
        copy. The previous region of this buffer is released.
        """
        if other is self:
            return
        if other.is_empty() or other._region is None:
            self.release()
            return
        region, layout = other._region, other.layout
        # Acquire first so rebinding to the same region never frees it.
        region.acquire()
        self.release()
        self._attach(region, layout, acquired=True)

    def release(self) -> None:
        """Drop this reference to the region and reset to the empty state."""
        if self._finalizer is not None:
            self._finalizer()
        self._finalizer = None
        self._region = None
        self.height = self.width = self.channels = self.stride = 0
        self.data = None
        self.ownership = Ownership.OWNED

    def _attach(self, region: _Region, layout: BufferLayout, acquired: bool = False) -> None:
        if not acquired:
            region.acquire()
        self._region = region
        self._finalizer = weakref.finalize(self, region.drop)
        self.height = layout.height
        self.width = layout.width
        self.channels = layout.channels
        self.stride = layout.stride
        self.data = region.view
        self.ownership = region.ownership

    def __copy__(self) -> "Buffer":
        return self.share()

    def __deepcopy__(self, memo: dict[int, Any]) -> "Buffer":
        return self.duplicate()

    def __repr__(self) -> str:
        if self.is_empty():
            return "Buffer(empty)"
        return (
            f"Buffer(height={self.height}, width={self.width}, channels={self.channels}, "
            f"stride={self.stride}, ownership={self.ownership.name})"
        )
