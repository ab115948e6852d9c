"""Core raster algorithms for rasterlite.

This module contains the pixel-level algorithms that operate on a Buffer:

- Color conversion between GRAY, RGB, BGR, RGBA and BGRA layouts
- Border extension (constant, replicate, reflect, reflect-101)
- Bilinear resizing
- Rasterization of lines, circles and rectangles
- Bitmap text rendering with alpha blending

All functions are designed to be:
- Exception-free for ordinary bad input (failure is the empty Buffer)
- Clipping rather than failing for out-of-bounds geometry
- Safe when a destination shares memory with its source

Key functions:
- cvt_color: Convert a buffer to another channel layout
- copy_make_border: Pad a buffer under an edge policy
- resize: Resample a buffer to a new size
- line, circle, rectangle, rectangle_rect, put_pixel: Draw primitives
- put_text, get_text_size: Render and measure text
"""

from rasterlite.core.border import border_map_coord, border_pick_value, copy_make_border
from rasterlite.core.color import (
    cvt_color,
    desired_channels,
    infer_space_from_channels,
    rgb_to_gray,
    swap_rb_inplace,
)
from rasterlite.core.draw import circle, line, put_pixel, rectangle, rectangle_rect
from rasterlite.core.resize import resize
from rasterlite.core.text import blend_pixel, get_text_size, put_text

__all__ = [
    # Border functions
    "border_map_coord",
    "border_pick_value",
    "copy_make_border",
    # Color functions
    "cvt_color",
    "desired_channels",
    "infer_space_from_channels",
    "rgb_to_gray",
    "swap_rb_inplace",
    # Drawing functions
    "circle",
    "line",
    "put_pixel",
    "rectangle",
    "rectangle_rect",
    # Resize
    "resize",
    # Text functions
    "blend_pixel",
    "get_text_size",
    "put_text",
]
