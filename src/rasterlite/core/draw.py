"""Primitive rasterization: pixels, lines, circles and rectangles.

Every function draws directly into the target buffer and clips silently:
geometry outside ``[0, width) x [0, height)`` is never an error. Empty or
read-only targets are left untouched.

Algorithms:
- Lines use the integer Bresenham error accumulator (8-connected). Thick
  lines stamp a filled disc at every step, giving round caps.
- Circles use the midpoint algorithm, either plotting the eight symmetric
  points (outline) or filling the horizontal span between them (disc).
- Rectangles are built from clipped horizontal and vertical runs.
"""

from collections.abc import Iterator

from rasterlite.domain import Buffer, ColorLike, Point, Rect, Scalar


def _pixel_bytes(img: Buffer, color: ColorLike) -> bytes:
    return Scalar.coerce(color).to_bytes(img.channels)


def _set(img: Buffer, x: int, y: int, px: bytes) -> None:
    if 0 <= x < img.width and 0 <= y < img.height:
        start = y * img.stride + x * img.channels
        img.data[start : start + len(px)] = px  # type: ignore[index]


def put_pixel(img: Buffer, x: int, y: int, color: ColorLike) -> None:
    """Write ``color`` into pixel (x, y); no-op when out of bounds."""
    if not img.writable:
        return
    _set(img, x, y, _pixel_bytes(img, color))


def _hline(img: Buffer, x0: int, x1: int, y: int, px: bytes) -> None:
    """Horizontal run from x0 to x1 inclusive, clipped."""
    if not 0 <= y < img.height:
        return
    if x0 > x1:
        x0, x1 = x1, x0
    x0 = max(0, x0)
    x1 = min(img.width - 1, x1)
    if x0 > x1:
        return
    c = img.channels
    n = len(px)
    start = y * img.stride
    if n == c:
        img.data[start + x0 * c : start + (x1 + 1) * c] = px * (x1 - x0 + 1)  # type: ignore[index]
        return
    for x in range(x0, x1 + 1):
        off = start + x * c
        img.data[off : off + n] = px  # type: ignore[index]


def _vline(img: Buffer, x: int, y0: int, y1: int, px: bytes) -> None:
    """Vertical run from y0 to y1 inclusive, clipped."""
    if not 0 <= x < img.width:
        return
    if y0 > y1:
        y0, y1 = y1, y0
    for y in range(max(0, y0), min(img.height - 1, y1) + 1):
        _set(img, x, y, px)


def _bresenham(p0: Point, p1: Point) -> Iterator[tuple[int, int]]:
    """Yield the 8-connected pixels from p0 to p1, both ends included."""
    x0, y0 = p0.x, p0.y
    x1, y1 = p1.x, p1.y
    dx, sx = abs(x1 - x0), (1 if x0 < x1 else -1)
    dy, sy = -abs(y1 - y0), (1 if y0 < y1 else -1)
    err = dx + dy

    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _midpoint_octants(radius: int) -> Iterator[tuple[int, int]]:
    """Yield the (x, y) midpoint-circle offsets of the first octant."""
    x, y = radius, 0
    err = 1 - x
    while x >= y:
        yield x, y
        y += 1
        if err < 0:
            err += 2 * y + 1
        else:
            x -= 1
            err += 2 * (y - x) + 1


def _disc(img: Buffer, cx: int, cy: int, radius: int, px: bytes) -> None:
    if radius <= 0:
        return
    for x, y in _midpoint_octants(radius):
        _hline(img, cx - x, cx + x, cy + y, px)
        _hline(img, cx - x, cx + x, cy - y, px)
        _hline(img, cx - y, cx + y, cy + x, px)
        _hline(img, cx - y, cx + y, cy - x, px)


def _ring(img: Buffer, cx: int, cy: int, radius: int, px: bytes) -> None:
    if radius <= 0:
        return
    for x, y in _midpoint_octants(radius):
        _set(img, cx + x, cy + y, px)
        _set(img, cx + y, cy + x, px)
        _set(img, cx - y, cy + x, px)
        _set(img, cx - x, cy + y, px)
        _set(img, cx - x, cy - y, px)
        _set(img, cx - y, cy - x, px)
        _set(img, cx + y, cy - x, px)
        _set(img, cx + x, cy - y, px)


def line(img: Buffer, p0: Point, p1: Point, color: ColorLike, thickness: int = 1) -> None:
    """Draw a line segment.

    Args:
        img: Target buffer
        p0: Start point
        p1: End point (inclusive)
        color: Line color
        thickness: 0 draws nothing; 1 or less draws a one-pixel line; larger
            values draw a round-capped stroke of radius ``thickness // 2``
    """
    if not img.writable or thickness == 0:
        return
    px = _pixel_bytes(img, color)

    if thickness <= 1:
        for x, y in _bresenham(p0, p1):
            _set(img, x, y, px)
        return

    radius = max(1, thickness // 2)
    for x, y in _bresenham(p0, p1):
        _disc(img, x, y, radius, px)


def circle(
    img: Buffer, center: Point, radius: int, color: ColorLike, thickness: int = 1
) -> None:
    """Draw a circle.

    Args:
        img: Target buffer
        center: Circle centre
        radius: Radius in pixels; non-positive draws nothing
        color: Circle color
        thickness: Negative fills the disc, 1 draws a one-pixel outline,
            larger values draw concentric outlines centred on ``radius``
    """
    if not img.writable or radius <= 0 or thickness == 0:
        return
    px = _pixel_bytes(img, color)

    if thickness < 0:
        _disc(img, center.x, center.y, radius, px)
        return

    if thickness == 1:
        _ring(img, center.x, center.y, radius, px)
        return

    half = thickness // 2
    r0 = max(1, radius - half)
    r1 = radius + (thickness - half - 1)
    for r in range(r0, r1 + 1):
        _ring(img, center.x, center.y, r, px)


def rectangle(
    img: Buffer, pt1: Point, pt2: Point, color: ColorLike, thickness: int = 1
) -> None:
    """Draw a rectangle between two opposite corners, both inclusive.

    Args:
        img: Target buffer
        pt1: One corner
        pt2: The opposite corner
        color: Rectangle color
        thickness: Negative fills the rectangle; otherwise the border is
            ``thickness`` pixels wide and grows inward
    """
    if not img.writable or thickness == 0:
        return
    px = _pixel_bytes(img, color)

    x0, x1 = min(pt1.x, pt2.x), max(pt1.x, pt2.x)
    y0, y1 = min(pt1.y, pt2.y), max(pt1.y, pt2.y)

    if thickness < 0:
        for y in range(max(0, y0), min(img.height - 1, y1) + 1):
            _hline(img, x0, x1, y, px)
        return

    t = max(1, thickness)
    for k in range(t):
        _hline(img, x0, x1, y0 + k, px)
        _hline(img, x0, x1, y1 - k, px)
    for k in range(t):
        _vline(img, x0 + k, y0, y1, px)
        _vline(img, x1 - k, y0, y1, px)


def rectangle_rect(img: Buffer, rect: Rect, color: ColorLike, thickness: int = 1) -> None:
    """Draw a half-open ``Rect``; its bottom-right corner is excluded."""
    br = rect.br()
    rectangle(img, rect.tl(), Point(br.x - 1, br.y - 1), color, thickness)
