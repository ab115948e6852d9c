"""Border extension: pad a buffer on each side under an edge policy."""

from collections.abc import Sequence

import structlog

from rasterlite.domain import BorderType, Buffer

logger = structlog.get_logger(__name__)


def border_pick_value(value: Sequence[int], k: int) -> int:
    """Fill value for channel ``k`` of a CONSTANT border.

    Fan-out rules:
    - no values: 0
    - one value: broadcast to every channel
    - three values: channels 0-2, and 255 for channel 3 (opaque alpha)
    - otherwise positional, repeating the last value for extra channels

    Args:
        value: Caller-supplied fill values
        k: Channel index

    Returns:
        Fill value for the channel, saturated to 0..255
    """
    if not value:
        v = 0
    elif len(value) == 1:
        v = value[0]
    elif len(value) == 3:
        v = value[k] if k < 3 else 255
    elif k < len(value):
        v = value[k]
    else:
        v = value[-1]
    return max(0, min(255, int(v)))


def border_map_coord(p: int, length: int, border_type: BorderType) -> int:
    """Map a possibly out-of-range coordinate onto ``[0, length)``.

    Args:
        p: Coordinate along one axis, may be negative or >= length
        length: Axis length, must be positive
        border_type: Edge policy; CONSTANT falls back to clamping

    Returns:
        Source index in ``[0, length)``

    Examples:
        >>> border_map_coord(-1, 4, BorderType.REFLECT)
        0
        >>> border_map_coord(-1, 4, BorderType.REFLECT_101)
        1
        >>> border_map_coord(4, 4, BorderType.REFLECT_101)
        2
    """
    if length == 1:
        return 0

    if border_type in (BorderType.REFLECT, BorderType.REFLECT_101):
        delta = 1 if border_type == BorderType.REFLECT_101 else 0
        while p < 0 or p >= length:
            if p < 0:
                p = -p - 1 + delta
            else:
                p = 2 * length - 1 - p - delta

    # REPLICATE clamps; after reflection this is a no-op
    return min(max(p, 0), length - 1)


def copy_make_border(
    src: Buffer,
    top: int,
    bottom: int,
    left: int,
    right: int,
    border_type: BorderType = BorderType.CONSTANT,
    value: Sequence[int] = (),
) -> Buffer:
    """Pad ``src`` with a border, returning a new tightly packed buffer.

    Args:
        src: Source buffer
        top: Rows added above (negative clamps to 0)
        bottom: Rows added below (negative clamps to 0)
        left: Columns added on the left (negative clamps to 0)
        right: Columns added on the right (negative clamps to 0)
        border_type: Edge policy
        value: Fill values for CONSTANT borders, see ``border_pick_value``

    Returns:
        Padded buffer with the same channel count, or the empty buffer when
        ``src`` is empty
    """
    if src.is_empty():
        return Buffer()

    top, bottom, left, right = max(0, top), max(0, bottom), max(0, left), max(0, right)
    c = src.channels
    out_h = src.height + top + bottom
    out_w = src.width + left + right

    out = Buffer.allocate(out_h, out_w, c)
    if out.is_empty():
        logger.debug("Border output has no area", height=out_h, width=out_w)
        return out

    if border_type == BorderType.CONSTANT:
        fill = bytes(border_pick_value(value, k) for k in range(c)) * out_w
        for y in range(out_h):
            out.row(y)[:] = fill
        start = left * c
        for y in range(src.height):
            out.row(y + top)[start : start + src.row_bytes] = src.row(y)
        return out

    # Column order of the output row, as byte indices into a source row
    xmap = [border_map_coord(x - left, src.width, border_type) for x in range(out_w)]
    byte_index = [sx * c + k for sx in xmap for k in range(c)]

    rows: dict[int, bytes] = {}
    for y in range(out_h):
        sy = border_map_coord(y - top, src.height, border_type)
        if sy not in rows:
            srow = src.row(sy).tobytes()
            rows[sy] = bytes(srow[i] for i in byte_index)
        out.row(y)[:] = rows[sy]

    return out
