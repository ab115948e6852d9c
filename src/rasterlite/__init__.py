"""Rasterlite - A small in-memory raster image toolkit.

Rasterlite provides a strided 8-bit image buffer with shared or borrowed
ownership, plus pixel-level algorithms that operate on it: color-space
conversion, border extension, resizing, and primitive rasterization
(lines, circles, rectangles and bitmap text).

Example:
    >>> from rasterlite.domain import Buffer, ColorSpace, Point
    >>> from rasterlite.core import cvt_color, line
    >>> img = Buffer.allocate(64, 64, 3)
    >>> line(img, Point(0, 0), Point(63, 63), (255, 0, 0))
    >>> gray = cvt_color(img, ColorSpace.GRAY)

Images are read and written with the Pillow-backed helpers in
``rasterlite.io`` and the ``rasterlite`` command-line tool.
"""

__version__ = "0.1.0"
__author__ = "Rasterlite Contributors"

__all__ = ["__author__", "__version__"]
