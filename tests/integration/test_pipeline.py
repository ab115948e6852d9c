"""End-to-end tests chaining decode, processing and encode."""

from pathlib import Path

from rasterlite.core import copy_make_border, cvt_color, put_text, rectangle, resize
from rasterlite.domain import BorderType, Buffer, ColorSpace, Point, Size
from rasterlite.io import imdecode, imencode, imread, imwrite


def _gradient(height: int, width: int) -> Buffer:
    buf = Buffer.allocate(height, width, 3)
    for y in range(height):
        row = bytes(v for x in range(width) for v in (x * 8 % 256, y * 8 % 256, 128))
        buf.row(y)[:] = row
    return buf


class TestPipeline:
    """Tests for chained operations."""

    def test_file_round_trip_through_bgr(self, tmp_path: Path) -> None:
        """Test that BGR processing written back as RGB keeps the pixels."""
        src = _gradient(10, 12)
        path = tmp_path / "grad.png"
        assert imwrite(path, src)

        bgr = imread(path, ColorSpace.BGR)
        rgb = cvt_color(bgr, ColorSpace.RGB, ColorSpace.BGR)
        assert rgb.tobytes() == src.tobytes()

    def test_border_resize_annotate_encode(self) -> None:
        """Test a typical thumbnail pipeline end to end."""
        src = _gradient(20, 30)
        padded = copy_make_border(src, 5, 5, 5, 5, BorderType.REFLECT_101)
        assert padded.size == Size(40, 30)

        thumb = resize(padded, Size(80, 60))
        put_text(thumb, "OK", Point(2, 50), 1.0, (255, 255, 255))
        rectangle(thumb, Point(0, 0), Point(79, 59), (255, 0, 0))

        data = imencode(thumb, ".png")
        assert data is not None
        decoded = imdecode(data)
        assert decoded.tobytes() == thumb.tobytes()
        assert decoded.pixel(0, 0) == (255, 0, 0)

    def test_gray_pipeline(self, tmp_path: Path) -> None:
        """Test converting to gray, padding and saving."""
        gray = cvt_color(_gradient(8, 8), ColorSpace.GRAY)
        framed = copy_make_border(gray, 1, 1, 1, 1, BorderType.CONSTANT, (255,))
        path = tmp_path / "framed.png"
        assert imwrite(path, framed)

        loaded = imread(path)
        assert loaded.channels == 1
        assert loaded.pixel(0, 0) == (255,)
        assert loaded.tobytes() == framed.tobytes()
