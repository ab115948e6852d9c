"""Bilinear resampling of a buffer to a new size.

Resampling is done by Pillow's BILINEAR filter; this module owns the Buffer
side: input validation, destination reuse and staging when the destination
shares memory with the source.
"""

import structlog
from PIL import Image

from rasterlite.domain import Buffer, Size
from rasterlite.io.writer import buffer_to_image

logger = structlog.get_logger(__name__)


def resize(src: Buffer, size: Size, dst: Buffer | None = None) -> Buffer:
    """Resize ``src`` to ``size`` with bilinear interpolation.

    Args:
        src: Source buffer
        size: Target width and height
        dst: Optional destination, reused when its geometry already matches.
            When it shares memory with ``src`` the result is staged through a
            scratch buffer and then moved into ``dst``.

    Returns:
        The resized buffer (``dst`` when given), or the empty buffer when
        ``src`` is empty or ``size`` has no area
    """
    if src.is_empty() or size.is_empty() or src.stride < src.row_bytes or src.channels > 4:
        logger.debug("Invalid resize input", size=size.to_tuple(), source=repr(src))
        if dst is None:
            return Buffer()
        dst.release()
        return dst

    if dst is not None and dst.shares_memory(src):
        staged = resize(src, size)
        dst.assign(staged)
        return dst

    c = src.channels
    reusable = (
        dst is not None
        and dst.writable
        and dst.width == size.width
        and dst.height == size.height
        and dst.channels == c
    )
    if dst is None:
        dst = Buffer.allocate(size.height, size.width, c)
    elif not reusable:
        dst.assign(Buffer.allocate(size.height, size.width, c))

    resized = buffer_to_image(src).resize(size.to_tuple(), Image.Resampling.BILINEAR)
    raw = resized.tobytes()
    row_bytes = dst.row_bytes
    for y in range(size.height):
        dst.row(y)[:] = raw[y * row_bytes : (y + 1) * row_bytes]

    return dst
