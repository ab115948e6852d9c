"""Bitmap text rendering with alpha blending.

Text is drawn with a fixed 20x40 coverage font. Each glyph pixel's coverage
is used as the alpha for blending ``color`` over the destination, so text
composes over existing image content instead of overwriting it.

Layout metrics at ``scale`` s:
- character advance: 20s + 2s
- line advance: 40s + 6s
- baseline offset: 6s above the bottom of the glyph cell
"""

import math

from rasterlite.core._font import GLYPH_HEIGHT, GLYPH_WIDTH, glyph_for
from rasterlite.domain import Buffer, ColorLike, Point, Scalar, Size

CHAR_GAP = 2
LINE_GAP = 6
BASELINE_OFFSET = 6


def _scale_of(font_scale: float) -> int:
    # halves round up (2.5 -> 3)
    return int(math.floor(max(1.0, font_scale) + 0.5))


def blend_pixel(img: Buffer, x: int, y: int, color: ColorLike, alpha: int) -> None:
    """Alpha-blend ``color`` over pixel (x, y).

    Uses ``dst = (dst * (255 - a) + src * a + 127) // 255`` on the color
    channels. The alpha channel of 2- and 4-channel buffers is left as is;
    on a gray+alpha buffer only the gray channel is blended.
    Out-of-bounds coordinates and ``alpha == 0`` are no-ops.
    """
    if not img.writable or alpha <= 0:
        return
    if not (0 <= x < img.width and 0 <= y < img.height):
        return
    _blend(img, x, y, Scalar.coerce(color).to_tuple(), min(alpha, 255))


def _blend(img: Buffer, x: int, y: int, color: tuple[int, ...], a: int) -> None:
    inv = 255 - a
    c = img.channels
    n = c if c in (1, 3) else c - 1
    off = y * img.stride + x * c
    data = img.data
    for k in range(n):
        data[off + k] = (data[off + k] * inv + color[k] * a + 127) // 255  # type: ignore[index]


def _draw_glyph(
    img: Buffer, x0: int, y0: int, glyph: bytes, scale: int, color: tuple[int, ...], t: int
) -> None:
    """Blit one glyph, dilating each covered pixel to t x t, then scale x scale."""
    w, h = img.width, img.height
    for gy in range(GLYPH_HEIGHT):
        row = gy * GLYPH_WIDTH
        for gx in range(GLYPH_WIDTH):
            a = glyph[row + gx]
            if a == 0:
                continue
            for oy in range(t):
                for ox in range(t):
                    px = x0 + gx * scale + ox
                    py = y0 + gy * scale + oy
                    for dy in range(scale):
                        yy = py + dy
                        if not 0 <= yy < h:
                            continue
                        for dx in range(scale):
                            xx = px + dx
                            if 0 <= xx < w:
                                _blend(img, xx, yy, color, a)


def put_text(
    img: Buffer,
    text: str,
    org: Point,
    font_scale: float,
    color: ColorLike,
    thickness: int = 1,
    bottom_left_origin: bool = False,
) -> None:
    """Render ``text`` into ``img``.

    Args:
        img: Target buffer
        text: Text to draw; ``'\\n'`` starts a new line and characters outside
            printable ASCII are drawn as ``'?'``
        org: Left end of the first line's baseline
        font_scale: Integer-rounded scale factor, at least 1
        color: Text color
        thickness: Dilation of every glyph pixel, at least 1
        bottom_left_origin: Interpret ``org.y`` as measured upward from the
            bottom row of the image
    """
    if not img.writable or not text:
        return

    scale = _scale_of(font_scale)
    t = max(1, thickness)
    gw = GLYPH_WIDTH * scale
    gh = GLYPH_HEIGHT * scale
    gap = CHAR_GAP * scale
    line_gap = LINE_GAP * scale
    fg = Scalar.coerce(color).to_tuple()

    x = org.x
    baseline_y = org.y

    for ch in text:
        if ch == "\n":
            x = org.x
            baseline_y += gh + line_gap
            continue

        if bottom_left_origin:
            y_top = (img.height - 1) - baseline_y - gh + 1
        else:
            y_top = baseline_y - gh

        _draw_glyph(img, x, y_top, glyph_for(ch), scale, fg, t)
        x += gw + gap


def get_text_size(text: str, font_scale: float, thickness: int = 1) -> tuple[Size, int]:
    """Measure the box ``put_text`` would cover, without drawing.

    Args:
        text: Text to measure
        font_scale: Same value that will be passed to ``put_text``
        thickness: Same value that will be passed to ``put_text``

    Returns:
        Tuple of (size, baseline) where baseline is the distance from the
        bottom of the glyph cell up to the text baseline
    """
    scale = _scale_of(font_scale)
    t = max(1, thickness)
    gw = GLYPH_WIDTH * scale
    gh = GLYPH_HEIGHT * scale
    gap = CHAR_GAP * scale
    line_gap = LINE_GAP * scale

    lines = text.split("\n")
    width = max(len(line) for line in lines) * (gw + gap)
    if width > 0:
        width -= gap
    height = len(lines) * gh + (len(lines) - 1) * line_gap

    baseline = BASELINE_OFFSET * scale + (t - 1)

    width += (t - 1) * 2
    height += (t - 1) * 2
    return Size(width, height), baseline
