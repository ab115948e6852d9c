"""Color-space conversion between GRAY, RGB, BGR, RGBA and BGRA layouts.

Conversion goes through a canonical (r, g, b, a) form: the source row is split
into channel planes, reordered, and re-interleaved into the destination
layout. Gray output uses the BT.601 luma weights in fixed point.
"""

import structlog

from rasterlite.domain import Buffer, ColorSpace

logger = structlog.get_logger(__name__)

_CHANNELS: dict[ColorSpace, int] = {
    ColorSpace.GRAY: 1,
    ColorSpace.RGB: 3,
    ColorSpace.BGR: 3,
    ColorSpace.RGBA: 4,
    ColorSpace.BGRA: 4,
}

_INFERRED: dict[int, ColorSpace] = {
    1: ColorSpace.GRAY,
    3: ColorSpace.RGB,
    4: ColorSpace.RGBA,
}

Planes = tuple[bytes, bytes, bytes, bytes]


def infer_space_from_channels(buf: Buffer) -> ColorSpace:
    """Infer a layout from a buffer's channel count.

    Returns:
        GRAY, RGB or RGBA for 1, 3 or 4 channels; UNCHANGED otherwise
    """
    return _INFERRED.get(buf.channels, ColorSpace.UNCHANGED)


def desired_channels(space: ColorSpace) -> int:
    """Channel count implied by a layout; 0 for AUTO and UNCHANGED."""
    return _CHANNELS.get(space, 0)


def is_bgr_family(space: ColorSpace) -> bool:
    return space in (ColorSpace.BGR, ColorSpace.BGRA)


def rgb_to_gray(r: int, g: int, b: int) -> int:
    """BT.601 luma, rounded, in fixed point.

    >>> rgb_to_gray(100, 150, 200)
    141
    """
    y = (299 * r + 587 * g + 114 * b + 500) // 1000
    return 0 if y < 0 else 255 if y > 255 else y


def swap_rb_inplace(buf: Buffer) -> None:
    """Swap channels 0 and 2 of every pixel in a 3- or 4-channel buffer."""
    if not buf.writable or buf.channels not in (3, 4):
        return
    c = buf.channels
    for y in range(buf.height):
        row = bytearray(buf.row(y))
        row[0::c], row[2::c] = row[2::c], row[0::c]
        buf.row(y)[:] = row


def _decode_row(row: bytes, space: ColorSpace, width: int) -> Planes:
    """Split an interleaved row into (r, g, b, a) planes."""
    if space == ColorSpace.GRAY:
        return row, row, row, b"\xff" * width
    c = _CHANNELS[space]
    first, g, third = row[0::c], row[1::c], row[2::c]
    a = row[3::c] if c == 4 else b"\xff" * width
    if is_bgr_family(space):
        return third, g, first, a
    return first, g, third, a


def _encode_row(planes: Planes, space: ColorSpace, width: int) -> bytes:
    """Interleave (r, g, b, a) planes into the layout of ``space``."""
    r, g, b, a = planes
    if space == ColorSpace.GRAY:
        return bytes(rgb_to_gray(rv, gv, bv) for rv, gv, bv in zip(r, g, b))
    c = _CHANNELS[space]
    out = bytearray(width * c)
    if is_bgr_family(space):
        out[0::c], out[2::c] = b, r
    else:
        out[0::c], out[2::c] = r, b
    out[1::c] = g
    if c == 4:
        out[3::c] = a
    return bytes(out)


def _resolve_source_space(src: Buffer, src_space: ColorSpace) -> ColorSpace | None:
    if src_space.is_meta:
        src_space = infer_space_from_channels(src)
    if desired_channels(src_space) != src.channels:
        return None
    return src_space


def _dst_compatible(dst: Buffer, height: int, width: int, channels: int) -> bool:
    return (
        dst.writable
        and dst.height == height
        and dst.width == width
        and dst.channels == channels
        and dst.stride >= width * channels
    )


def _fail(dst: Buffer | None) -> Buffer:
    if dst is None:
        return Buffer()
    dst.release()
    return dst


def cvt_color(
    src: Buffer,
    dst_space: ColorSpace,
    src_space: ColorSpace = ColorSpace.AUTO,
    dst: Buffer | None = None,
) -> Buffer:
    """Convert a buffer between GRAY, RGB, BGR, RGBA and BGRA layouts.

    Warning:
        When ``dst_space`` is AUTO or UNCHANGED no conversion happens: the
        result is a *shallow* copy that shares memory with ``src``. Writes to
        the result are visible through ``src``. Call ``duplicate()`` on the
        result if an independent image is needed.

    Args:
        src: Source buffer
        dst_space: Target layout
        src_space: Source layout; AUTO/UNCHANGED infer it from the channel
            count (1 -> GRAY, 3 -> RGB, 4 -> RGBA)
        dst: Optional destination. Reused when its geometry already matches,
            re-allocated otherwise. When it shares memory with ``src`` the
            conversion is staged through a scratch buffer first.

    Returns:
        The converted buffer (``dst`` when given), or the empty buffer when
        ``src`` is empty or the layout combination is unsupported
    """
    if src.is_empty():
        return _fail(dst)

    resolved = _resolve_source_space(src, src_space)
    if resolved is None:
        logger.debug(
            "Unsupported source color space",
            src_space=src_space.value,
            channels=src.channels,
        )
        return _fail(dst)

    if dst_space.is_meta:
        if dst is None:
            return src.share()
        dst.assign(src)
        return dst

    dst_channels = desired_channels(dst_space)

    if dst is not None and dst.shares_memory(src):
        staged = cvt_color(src, dst_space, resolved)
        dst.assign(staged)
        return dst

    if dst is None:
        dst = Buffer.allocate(src.height, src.width, dst_channels)
    elif not _dst_compatible(dst, src.height, src.width, dst_channels):
        dst.assign(Buffer.allocate(src.height, src.width, dst_channels))

    if resolved == dst_space and src.channels == dst.channels and src.stride == dst.stride:
        nbytes = src.height * src.stride
        dst.data[:nbytes] = src.data[:nbytes]  # type: ignore[index]
        return dst

    for y in range(src.height):
        planes = _decode_row(src.row(y).tobytes(), resolved, src.width)
        dst.row(y)[:] = _encode_row(planes, dst_space, src.width)

    return dst
